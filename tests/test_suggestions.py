"""
Unit tests for advisory suggestions.
"""
import unittest

from pcbuild_compat.processing import suggestions as S
from pcbuild_compat.processing.compatibility import run_all_compatibility_checks
from pcbuild_compat.state.schema import BuildState
from tests.parts import AM5_ITX_BOARD, SSD, TOWER_COOLER, build, knowledge_base, product, record

BOTTLENECK_MESSAGES = (S.CPU_STRONGER_MESSAGE, S.GPU_STRONGER_MESSAGE)


class TestBottleneck(unittest.TestCase):

    def setUp(self):
        self.kb = knowledge_base()

    def test_cpu_much_stronger(self):
        state = build(
            cpu=product("AMD Ryzen 9 7950X"),
            gpu=product("Gigabyte GeForce GTX 1650 näytönohjain"),
        )
        report = run_all_compatibility_checks(state, self.kb)
        self.assertEqual(report.issues, [])

        suggestions = S.generate_suggestions(state, self.kb)
        self.assertEqual([s for s in suggestions if s in BOTTLENECK_MESSAGES], [S.CPU_STRONGER_MESSAGE])
        self.assertEqual(
            suggestions,
            [S.CPU_STRONGER_MESSAGE, S.MISSING_COOLER_MESSAGE, S.MISSING_STORAGE_MESSAGE],
        )

    def test_gpu_much_stronger(self):
        message = S.analyze_bottleneck(
            product("Intel Celeron G6900"), product("MSI GeForce RTX 4090 SUPRIM X"), self.kb
        )
        self.assertEqual(message, S.GPU_STRONGER_MESSAGE)

    def test_balanced(self):
        message = S.analyze_bottleneck(
            product("Intel Core i3-12100F"), product("ASUS Dual GeForce RTX 4060"), self.kb
        )
        self.assertIsNone(message)

    def test_unknown_tier(self):
        message = S.analyze_bottleneck(product("AMD Ryzen 5 5600X"), product("GeForce GTX 1650"), self.kb)
        self.assertIsNone(message)


class TestMemorySuggestions(unittest.TestCase):

    def setUp(self):
        self.kb = knowledge_base()

    def test_overcommit(self):
        state = build(
            motherboard=AM5_ITX_BOARD,
            memory=product("Corsair Vengeance 64GB (4 x 16GB) DDR5 muisti"),
            storage=SSD,
        )
        self.assertEqual(
            S.generate_suggestions(state, self.kb),
            ["VAROITUS: Muistikampoja on 4 kpl, mutta emolevyssä on vain 2 paikkaa."],
        )

    def test_type_mismatch(self):
        state = build(cpu=product("AMD Ryzen 7 7700X"), memory=product("Kingston 16GB DDR4 3600MHz muisti"))
        self.assertIn(
            "KRIITTINEN: Muisti on DDR4, mutta prosessori tukee vain DDR5. Valitse DDR5-muisti.",
            S.generate_suggestions(state, self.kb),
        )

    def test_check_memory_compatibility(self):
        message = S.check_memory_compatibility(
            product("Intel Core i5-11400F"), product("Kingston 16GB DDR5 muisti")
        )
        self.assertEqual(message, "Muisti on DDR5, mutta prosessori tukee vain DDR4. Valitse DDR4-muisti.")
        self.assertIsNone(
            S.check_memory_compatibility(product("Intel Core i5-13400F"), product("Kingston 16GB DDR5 muisti"))
        )

    def test_slow_memory(self):
        cpu = product("Intel Core i5-13400F")
        slow = build(cpu=cpu, memory=product("Kingston 16GB DDR4 2666MHz muisti"))
        fast = build(cpu=cpu, memory=product("Kingston 16GB DDR4 3600MHz muisti"))
        unknown = build(cpu=cpu, memory=product("Kingston 16GB DDR4 muisti"))
        self.assertIn(S.MEMORY_SPEED_MESSAGE, S.generate_suggestions(slow, self.kb))
        self.assertNotIn(S.MEMORY_SPEED_MESSAGE, S.generate_suggestions(fast, self.kb))
        self.assertIn(S.MEMORY_SPEED_MESSAGE, S.generate_suggestions(unknown, self.kb))


class TestPsuSuggestions(unittest.TestCase):

    def setUp(self):
        self.kb = knowledge_base()

    def _suggestions(self, gpu_name, psu_watts):
        state = build(
            gpu=product(gpu_name),
            psu=product(f"Generic {psu_watts}W virtalähde", Teho=f"{psu_watts} W"),
        )
        return S.generate_suggestions(state, self.kb)

    def test_near_max(self):
        # 150 W default GPU draw + 50 W baseline on a 200 W unit
        self.assertIn(S.PSU_NEAR_MAX_MESSAGE, self._suggestions("Unknown näytönohjain", 200))

    def test_oversized(self):
        self.assertIn(S.PSU_OVERSIZED_MESSAGE, self._suggestions("ASUS Dual GeForce RTX 4060", 1000))

    def test_reasonable(self):
        suggestions = self._suggestions("Unknown näytönohjain", 300)
        self.assertNotIn(S.PSU_NEAR_MAX_MESSAGE, suggestions)
        self.assertNotIn(S.PSU_OVERSIZED_MESSAGE, suggestions)

    def test_requires_gpu(self):
        state = build(psu=product("Generic 1000W virtalähde", Teho="1000 W"))
        self.assertNotIn(S.PSU_OVERSIZED_MESSAGE, S.generate_suggestions(state, self.kb))


class TestMissingParts(unittest.TestCase):

    def setUp(self):
        self.kb = knowledge_base()

    def test_empty_build(self):
        self.assertEqual(S.generate_suggestions(BuildState(), self.kb), [S.MISSING_STORAGE_MESSAGE])

    def test_boxed_cooler(self):
        cpu = record("AMD Ryzen 5 5600", {"Jäähdytin mukana": "Kyllä"})
        self.assertNotIn(S.MISSING_COOLER_MESSAGE, S.generate_suggestions(build(cpu=cpu), self.kb))

    def test_cooler_present(self):
        state = build(cpu=product("AMD Ryzen 7 7800X3D"), cooler=TOWER_COOLER)
        self.assertNotIn(S.MISSING_COOLER_MESSAGE, S.generate_suggestions(state, self.kb))

    def test_numbered_storage_counts(self):
        state = build(storage_1=SSD)
        self.assertEqual(S.generate_suggestions(state, self.kb), [])


if __name__ == "__main__":
    unittest.main()
