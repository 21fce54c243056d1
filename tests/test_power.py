"""
Unit tests for the system power estimate.
"""
import unittest

from pcbuild_compat.processing.power import (
    BASELINE_WATTS,
    DEFAULT_CPU_WATTS,
    DEFAULT_GPU_WATTS,
    estimate_system_power,
)
from pcbuild_compat.state.schema import BuildState
from tests.parts import AM5_CPU, DDR5_PAIR, SSD, TOWER_COOLER, build, knowledge_base, product


class TestEstimateSystemPower(unittest.TestCase):

    def setUp(self):
        self.kb = knowledge_base()

    def test_empty_build(self):
        self.assertEqual(estimate_system_power(BuildState(), self.kb), 0)

    def test_cpu_default(self):
        state = build(cpu=AM5_CPU)
        self.assertEqual(estimate_system_power(state, self.kb), DEFAULT_CPU_WATTS + BASELINE_WATTS)

    def test_cpu_tdp(self):
        state = build(cpu=product("AMD Ryzen 9 7950X", TDP="170 W"))
        self.assertEqual(estimate_system_power(state, self.kb), 170 + BASELINE_WATTS)

    def test_gpu_default(self):
        state = build(gpu=product("Unknown näytönohjain"))
        self.assertEqual(estimate_system_power(state, self.kb), DEFAULT_GPU_WATTS + BASELINE_WATTS)

    def test_gpu_from_knowledge_base(self):
        state = build(gpu=product("MSI GeForce RTX 4090 SUPRIM X"))
        self.assertEqual(estimate_system_power(state, self.kb), 450 + BASELINE_WATTS)

    def test_memory_sticks_across_instances(self):
        single = product("Kingston 16GB DDR5 muisti")
        state = build(memory=DDR5_PAIR, memory_1=single)
        self.assertEqual(estimate_system_power(state, self.kb), 3 * 5 + BASELINE_WATTS)

    def test_storage_instances(self):
        state = build(storage=SSD, storage_2=SSD)
        self.assertEqual(estimate_system_power(state, self.kb), 2 * 5 + BASELINE_WATTS)

    def test_cooler(self):
        state = build(cooler=TOWER_COOLER)
        self.assertEqual(estimate_system_power(state, self.kb), 10 + BASELINE_WATTS)

    def test_parts_without_draw_still_add_baseline(self):
        state = build(case=product("Fractal Design North kotelo"))
        self.assertEqual(estimate_system_power(state, self.kb), BASELINE_WATTS)

    def test_adding_parts_never_lowers_estimate(self):
        state = BuildState()
        previous = estimate_system_power(state, self.kb)
        for slot, part in (
            ("case", product("Fractal Design North kotelo")),
            ("cpu", AM5_CPU),
            ("memory", DDR5_PAIR),
            ("memory-1", DDR5_PAIR),
            ("storage", SSD),
            ("cooler", TOWER_COOLER),
            ("gpu", product("MSI GeForce RTX 4090 SUPRIM X")),
        ):
            state = state.with_component(slot, part)
            current = estimate_system_power(state, self.kb)
            self.assertGreaterEqual(current, previous, slot)
            previous = current


if __name__ == "__main__":
    unittest.main()
