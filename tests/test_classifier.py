"""
Unit tests for product category classification.

The first matching rule wins, so the interesting cases are the products whose
names contain words from more than one category.
"""
import unittest

from pcbuild_compat.processing.classifier import classify_many, determine_actual_category
from pcbuild_compat.state.schema import CATEGORIES
from tests.parts import AM5_CPU, SSD, TOWER_COOLER, product, record


class TestDetermineActualCategory(unittest.TestCase):

    def test_typical_names(self):
        cases = {
            "AMD Ryzen 7 7800X3D prosessori": "cpu",
            "Intel Core i5-12400F": "cpu",
            "ASUS Dual GeForce RTX 4060 OC 8GB näytönohjain": "gpu",
            "Sapphire PULSE Radeon RX 7800 XT": "gpu",
            "ASUS TUF GAMING B650-PLUS WIFI ATX emolevy": "motherboard",
            "Kingston FURY Beast 32GB DDR5 6000MHz muisti": "memory",
            "Corsair Vengeance LPX DDR4 16GB kit": "memory",
            "Corsair RM750e 750W virtalähde": "psu",
            "Seasonic Focus 650W 80+ Gold modular": "psu",
            "Fractal Design North kotelo": "case",
            "NZXT H5 Flow Mid Tower": "case",
            "Samsung 990 PRO 2TB NVMe M.2 SSD": "storage",
            "WD Blue 4TB SATA drive": "storage",
            "Noctua NH-D15 CPU Cooler": "cooler",
            "be quiet! Pure Rock 2 prosessorijäähdytin": "cooler",
        }
        for name, expected in cases.items():
            self.assertEqual(determine_actual_category(product(name)), expected, name)

    def test_cooler_before_cpu(self):
        self.assertEqual(determine_actual_category(product("Arctic Freezer 36 CPU fan")), "cooler")

    def test_processor_genitive_is_not_a_cpu(self):
        # "prosessorin" (of the processor) appears in accessory names
        self.assertEqual(determine_actual_category(product("Prosessorin lämpötahna")), "unknown")

    def test_integrated_graphics_is_not_a_gpu(self):
        self.assertNotEqual(determine_actual_category(product("Integrated graphics adapter")), "gpu")

    def test_ddr_without_memory_terms(self):
        self.assertEqual(determine_actual_category(product("Corsair DDR5 heatsink")), "unknown")

    def test_memory_by_spec_keys(self):
        memory = record("Corsair Vengeance DDR5 32GB", {"Memory type": "DDR5"})
        self.assertEqual(determine_actual_category(memory), "memory")

    def test_psu_by_spec_keys(self):
        psu = record("be quiet! Pure Power 12 M", {"Hyötysuhde": "80+ Gold", "Teho": "850 W"})
        self.assertEqual(determine_actual_category(psu), "psu")

    def test_storage_by_spec_keys(self):
        drive = record("Crucial P3 Plus", {"Kapasiteetti": "1 TB", "Interface": "PCIe 4.0"})
        self.assertEqual(determine_actual_category(drive), "storage")

    def test_showcase_is_not_a_case(self):
        self.assertEqual(determine_actual_category(product("Acrylic showcase")), "unknown")

    def test_results_are_known_and_stable(self):
        names = (
            "AMD Ryzen 7 7800X3D", "Noctua NH-D15 CPU Cooler", "Corsair RM750e 750W virtalähde",
            "Fractal Design North kotelo", "Logitech G502 hiiri", "", "DDR5", "1000W", "ATX",
        )
        for name in names:
            category = determine_actual_category(product(name))
            self.assertIn(category, CATEGORIES, name)
            self.assertEqual(determine_actual_category(product(name)), category, name)

    def test_unknown(self):
        self.assertEqual(determine_actual_category(product("Logitech G502 hiiri")), "unknown")
        self.assertEqual(determine_actual_category(product("")), "unknown")


class TestClassifyMany(unittest.TestCase):

    def test_maps_every_slot(self):
        result = classify_many({"cpu": AM5_CPU, "cooler": TOWER_COOLER, "storage-2": SSD})
        self.assertEqual(result, {"cpu": "cpu", "cooler": "cooler", "storage-2": "storage"})


if __name__ == "__main__":
    unittest.main()
