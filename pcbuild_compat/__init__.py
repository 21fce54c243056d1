"""
PC Build Compatibility Engine

Extracts normalized hardware facts from free-form product spec sheets and
checks a partially filled PC build for compatibility problems.
"""
from pcbuild_compat.checker import CompatibilityChecker
from pcbuild_compat.processing.classifier import classify, determine_actual_category
from pcbuild_compat.processing.compatibility import run_all_compatibility_checks, validate_placement
from pcbuild_compat.processing.power import estimate_system_power
from pcbuild_compat.processing.suggestions import generate_suggestions
from pcbuild_compat.state.schema import (
    BuildState,
    CompatibilityReport,
    Issue,
    PlacementResult,
    ProductRecord,
    Severity,
)
from pcbuild_compat.utils.config import KnowledgeBase, SpecDisplayTable, load_display_table, load_knowledge_base

__version__ = "1.0.0"

__all__ = [
    "CompatibilityChecker",
    "BuildState",
    "ProductRecord",
    "Issue",
    "Severity",
    "PlacementResult",
    "CompatibilityReport",
    "KnowledgeBase",
    "SpecDisplayTable",
    "load_knowledge_base",
    "load_display_table",
    "classify",
    "determine_actual_category",
    "validate_placement",
    "run_all_compatibility_checks",
    "estimate_system_power",
    "generate_suggestions",
]
