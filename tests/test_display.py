"""
Unit tests for the spec display helpers.
"""
import unittest

from pcbuild_compat.processing import display as D
from pcbuild_compat.state.schema import ProductRecord
from tests.parts import AM5_CPU, DDR5_PAIR, SSD, display_table, product, record


class TestCleanSpecValue(unittest.TestCase):

    def test_splits_joined_words(self):
        self.assertEqual(D.clean_spec_value("SuoritinkantaAM5"), "Suoritinkanta AM5")
        self.assertEqual(D.clean_spec_value("8Ytimet"), "8 Ytimet")

    def test_truncates_long_values(self):
        cleaned = D.clean_spec_value("x" * 200)
        self.assertEqual(len(cleaned), D.MAX_VALUE_LENGTH + 3)
        self.assertTrue(cleaned.endswith("..."))

    def test_non_text_values(self):
        self.assertEqual(D.clean_spec_value(65), "65")


class TestSpecSelection(unittest.TestCase):

    def setUp(self):
        self.table = display_table()

    def test_excluded_keys_dropped(self):
        rows = D.filter_relevant_specs([("EAN-koodi", "123"), ("Socket", "AM5")], self.table)
        self.assertEqual(rows, [("Socket", "AM5")])

    def test_important_specs_limit(self):
        specs = {f"TDP {i}": f"{i} W" for i in range(12)}
        self.assertEqual(len(D.get_important_specs(specs, self.table)), D.MAX_IMPORTANT_SPECS)

    def test_category_key_specs(self):
        cpu = record(
            "AMD Ryzen 7 7800X3D prosessori",
            {"Suoritinkanta": "AM5", "Ytimien määrä": "8", "TDP": "120 W", "Socket": "AM5", "Väri": "Musta"},
        )
        rows = D.get_category_key_specs(cpu, self.table)
        self.assertEqual(rows, [("Suoritinkanta", "AM5"), ("Ytimien määrä", "8"), ("TDP", "120 W")])

    def test_category_without_key_specs(self):
        self.assertEqual(D.get_category_key_specs(SSD, self.table), [])

    def test_expert_specs_fall_back_to_relevant_rows(self):
        gpu = record("ASUS Dual GeForce RTX 4060", {"Pituus": "227 mm", "Takuu": "3 v"})
        self.assertEqual(D.get_expert_specs(gpu, self.table), [("Pituus", "227 mm")])

    def test_expert_specs_prefer_important_rows(self):
        self.assertEqual(D.get_expert_specs(AM5_CPU, self.table), [("Suoritinkanta", "AM5")])


class TestDisplayNames(unittest.TestCase):

    def setUp(self):
        self.table = display_table()

    def test_category_display_name(self):
        self.assertEqual(D.get_category_display_name("cpu", self.table), "Prosessori")
        self.assertEqual(D.get_category_display_name("gpu", self.table), "gpu")

    def test_numbered_slots(self):
        self.assertEqual(D.slot_display_name("memory-2", DDR5_PAIR, self.table), "Muisti 2")
        self.assertEqual(D.slot_display_name("storage-1", SSD, self.table), "Tallennustila 1")

    def test_base_slot_uses_category(self):
        self.assertEqual(D.slot_display_name("cpu", product("x"), self.table), "Prosessori")
        self.assertEqual(D.slot_display_name("storage", ProductRecord(name="x", category="memory"), self.table), "Muisti")


if __name__ == "__main__":
    unittest.main()
