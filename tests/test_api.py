"""
Tests for the FastAPI surface, using an in-memory Knowledge Base.
"""
import unittest

from fastapi.testclient import TestClient

from api.server import app
from pcbuild_compat.checker import CompatibilityChecker
from tests.parts import display_table, knowledge_base

AM5_CPU = {"name": "AMD Ryzen 7 7800X3D prosessori", "productCode": "100-100000910WOF", "specs": {"Suoritinkanta": "AM5"}}
AM4_BOARD = {"name": "ASUS TUF GAMING B550-PLUS emolevy", "specs": {"Socket": "AM4"}}
PSU = {"name": "Corsair RM750e 750W virtalähde", "specs": {"Teho": "750 W"}}


class TestApi(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        app.state.checker = CompatibilityChecker(knowledge_base(), display_table())
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls):
        app.state.checker = None

    def test_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "online")

    def test_check_socket_mismatch(self):
        response = self.client.post(
            "/compatibility/check",
            json={"build": {"components": {"cpu": AM5_CPU, "motherboard": AM4_BOARD}}},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["compatible"])
        self.assertEqual(len(body["issues"]), 1)
        self.assertEqual(body["issues"][0]["severity"], "CRITICAL")
        self.assertEqual(body["estimated_power"], 115)

    def test_check_rejects_unknown_slot(self):
        response = self.client.post("/compatibility/check", json={"build": {"components": {"ram": AM5_CPU}}})
        self.assertEqual(response.status_code, 422)

    def test_suggestions(self):
        response = self.client.post("/compatibility/suggestions", json={"build": {"components": {"cpu": AM5_CPU}}})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["suggestions"]), 2)

    def test_placement(self):
        response = self.client.post("/compatibility/placement", json={"slot": "gpu", "product": PSU})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertFalse(body["valid"])
        self.assertEqual(body["category"], "psu")
        self.assertIn("näytönohjaimelle", body["message"])

    def test_placement_invalid_slot(self):
        response = self.client.post("/compatibility/placement", json={"slot": "memory-0", "product": PSU})
        self.assertEqual(response.status_code, 422)

    def test_classify(self):
        response = self.client.post("/products/classify", json={"product": AM4_BOARD})
        self.assertEqual(response.json(), {"category": "motherboard"})

    def test_attributes(self):
        response = self.client.post("/products/attributes", json={"product": AM5_CPU})
        attributes = response.json()["attributes"]
        self.assertEqual(attributes["category"], "cpu")
        self.assertEqual(attributes["cpu_socket"], "AM5")
        self.assertEqual(attributes["cpu_memory_type"], "DDR5")
        self.assertIsNone(attributes["gpu_length_mm"])


if __name__ == "__main__":
    unittest.main()
