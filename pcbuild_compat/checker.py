"""
Compatibility checker - binds the reference tables once and exposes the engine.

The module-level functions in pcbuild_compat.processing take the tables as
arguments; this class holds them for callers that check many builds against the
same tables.
"""
from typing import Any, Dict, List, Optional

from pcbuild_compat.processing import display
from pcbuild_compat.processing import extractors as E
from pcbuild_compat.processing.classifier import determine_actual_category
from pcbuild_compat.processing.compatibility import run_all_compatibility_checks, validate_placement
from pcbuild_compat.processing.power import estimate_system_power
from pcbuild_compat.processing.suggestions import generate_suggestions
from pcbuild_compat.state.schema import BuildState, CompatibilityReport, PlacementResult, ProductRecord
from pcbuild_compat.utils.config import (
    KnowledgeBase,
    SpecDisplayTable,
    load_display_table,
    load_knowledge_base,
)
from pcbuild_compat.utils.logger import get_logger

logger = get_logger("checker")


class CompatibilityChecker:
    """Compatibility engine bound to one Knowledge Base and display table."""

    def __init__(self, knowledge_base: KnowledgeBase, display_table: Optional[SpecDisplayTable] = None):
        self.knowledge_base = knowledge_base
        self.display_table = display_table or SpecDisplayTable()

    @classmethod
    def from_config(cls, hardware_path=None, specs_path=None) -> "CompatibilityChecker":
        """Create a checker from the YAML tables (defaults under config/)."""
        return cls(load_knowledge_base(hardware_path), load_display_table(specs_path))

    def classify(self, record: ProductRecord) -> str:
        return determine_actual_category(record)

    def validate_placement(self, slot: str, record: ProductRecord) -> PlacementResult:
        return validate_placement(slot, record)

    def run_all_checks(self, build: BuildState) -> CompatibilityReport:
        return run_all_compatibility_checks(build, self.knowledge_base)

    def generate_suggestions(self, build: BuildState) -> List[str]:
        return generate_suggestions(build, self.knowledge_base)

    def estimate_system_power(self, build: BuildState) -> int:
        return estimate_system_power(build, self.knowledge_base)

    def check(self, build: BuildState) -> Dict[str, Any]:
        """
        Full evaluation of a build.

        Returns:
            Dict with the compatibility report and the advisory suggestions
        """
        report = self.run_all_checks(build)
        suggestions = self.generate_suggestions(build)
        logger.info(
            f"Build with {build.size} components: compatible={report.compatible}, "
            f"{len(report.issues)} issue(s), {len(suggestions)} suggestion(s)"
        )
        return {"report": report, "suggestions": suggestions}

    def extract_attributes(self, record: ProductRecord) -> Dict[str, Any]:
        """
        Every fact the engine can read from a record, keyed by attribute name.
        Facts that do not apply or cannot be determined are None.
        """
        kb = self.knowledge_base
        return {
            "category": determine_actual_category(record),
            "cpu_socket": E.extract_cpu_socket(record),
            "motherboard_socket": E.extract_motherboard_socket(record),
            "motherboard_memory_type": E.extract_motherboard_memory_type(record),
            "memory_type": E.extract_memory_type(record),
            "cpu_memory_type": E.extract_cpu_memory_type(record),
            "gpu_length_mm": E.extract_gpu_length(record),
            "case_gpu_clearance_mm": E.extract_case_gpu_clearance(record),
            "cooler_sockets": E.extract_cooler_sockets(record),
            "form_factor": E.extract_form_factor(record),
            "case_form_factors": E.extract_case_form_factors(record),
            "cooler_height_mm": E.extract_cooler_height(record),
            "case_cooler_clearance_mm": E.extract_case_cooler_clearance(record),
            "memory_stick_count": E.extract_memory_stick_count(record),
            "motherboard_memory_slots": E.extract_motherboard_memory_slots(record),
            "memory_speed_mhz": E.extract_memory_speed(record),
            "psu_wattage": E.extract_psu_wattage(record),
            "component_tdp": E.extract_component_tdp(record),
            "gpu_power": E.extract_gpu_power(record, kb),
            "cpu_tier": E.get_cpu_tier(record, kb),
            "gpu_tier": E.get_gpu_tier(record, kb),
            "cpu_includes_cooler": E.cpu_includes_cooler(record),
        }

    def key_specs(self, record: ProductRecord, expert: bool = False) -> List[display.SpecRow]:
        """Spec rows for display: headline rows, or the longer expert list."""
        if expert:
            return display.get_expert_specs(record, self.display_table)
        return display.get_category_key_specs(record, self.display_table)

    def slot_label(self, slot: str, record: ProductRecord) -> str:
        return display.slot_display_name(slot, record, self.display_table)
