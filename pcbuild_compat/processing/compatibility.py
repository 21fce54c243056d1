"""
Compatibility Rule Set

Runs a fixed pipeline of checks over a build snapshot:

1. placement validation for every occupied slot
2. pairwise/aggregate part checks (COMPATIBILITY_RULES, in order)
3. the PSU wattage check against the estimated system draw

A check whose inputs are missing (empty slot or undeterminable fact) passes:
unknown is never treated as incompatible. Messages are user-facing Finnish
text; the order of the returned issues is the display order.
"""
from typing import Callable, List, Optional, Tuple

from pcbuild_compat.processing import extractors as E
from pcbuild_compat.processing.classifier import determine_actual_category
from pcbuild_compat.processing.power import estimate_system_power
from pcbuild_compat.state.schema import (
    MULTI_SLOTS,
    BuildState,
    CheckResult,
    CompatibilityReport,
    Issue,
    PlacementResult,
    ProductRecord,
    Severity,
    parse_slot,
)
from pcbuild_compat.utils.config import KnowledgeBase
from pcbuild_compat.utils.logger import get_logger

logger = get_logger("processing.compatibility")

# Share of PSU capacity above which headroom is considered too thin
PSU_HEADROOM_RATIO = 0.8

# Category names as the subject of a sentence ("X on prosessori")
NOMINATIVE_NAMES = {
    "cpu": "prosessori",
    "gpu": "näytönohjain",
    "memory": "muisti",
    "storage": "tallennustila",
    "motherboard": "emolevy",
    "psu": "virtalähde",
    "case": "kotelo",
    "cooler": "jäähdytin",
}

# Category names as the target of "tarkoitettu ..." ("meant for X")
ALLATIVE_NAMES = {
    "cpu": "prosessorille",
    "gpu": "näytönohjaimelle",
    "memory": "muistille",
    "storage": "tallennustilalle",
    "motherboard": "emolevylle",
    "psu": "virtalähteelle",
    "case": "kotelolle",
    "cooler": "jäähdyttimelle",
}


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


def _slot_mismatch_message(expected: str, actual: str, product_name: str) -> str:
    expected_name = ALLATIVE_NAMES.get(expected, expected)
    actual_name = NOMINATIVE_NAMES.get(actual, actual)
    return f'"{product_name}" on {actual_name}, mutta tämä paikka on tarkoitettu {expected_name}.'


def validate_placement(slot: str, record: ProductRecord) -> PlacementResult:
    """
    Check that a product belongs in the slot it was placed in.

    Numbered memory/storage slots accept the same category as their base slot.
    """
    base, _ = parse_slot(slot)
    expected = base or "unknown"
    actual = determine_actual_category(record)

    if base in MULTI_SLOTS and actual == base:
        return PlacementResult(valid=True)

    if actual != expected:
        return PlacementResult(
            valid=False,
            message=_slot_mismatch_message(expected, actual, record.name),
        )
    return PlacementResult(valid=True)


def validate_all_placements(build: BuildState) -> List[Issue]:
    issues = []
    for slot, record in build.components.items():
        result = validate_placement(slot, record)
        if not result.valid:
            issues.append(Issue(severity=Severity.CRITICAL, message=result.message))
    return issues


# ---------------------------------------------------------------------------
# Pairwise and aggregate checks
# ---------------------------------------------------------------------------


def check_cpu_motherboard_socket(build: BuildState) -> CheckResult:
    cpu = build.get("cpu")
    motherboard = build.get("motherboard")
    if cpu is None or motherboard is None:
        return CheckResult()

    cpu_socket = E.extract_cpu_socket(cpu)
    board_socket = E.extract_motherboard_socket(motherboard)
    if cpu_socket and board_socket and E.normalize_socket(cpu_socket) != E.normalize_socket(board_socket):
        return CheckResult(
            compatible=False,
            message=f"Prosessori vaatii {cpu_socket} kantaa, mutta emolevy tukee {board_socket} kantaa.",
        )
    return CheckResult()


def check_memory_motherboard_type(build: BuildState) -> CheckResult:
    motherboard = build.get("motherboard")
    memories = build.memory_components()
    if motherboard is None or not memories:
        return CheckResult()

    board_type = E.extract_motherboard_memory_type(motherboard)
    if board_type is None:
        return CheckResult()
    for memory in memories:
        memory_type = E.extract_memory_type(memory)
        if memory_type and memory_type != board_type:
            return CheckResult(
                compatible=False,
                message=f"Emolevy tukee {board_type.value} muistia, mutta muisti on {memory_type.value} tyyppiä.",
            )
    return CheckResult()


def check_memory_cpu_type(build: BuildState) -> CheckResult:
    cpu = build.get("cpu")
    memories = build.memory_components()
    if cpu is None or not memories:
        return CheckResult()

    cpu_type = E.extract_cpu_memory_type(cpu)
    if cpu_type is None:
        return CheckResult()
    for memory in memories:
        memory_type = E.extract_memory_type(memory)
        if memory_type and memory_type != cpu_type:
            return CheckResult(
                compatible=False,
                message=f"Prosessori tukee {cpu_type.value} muistia, mutta muisti on {memory_type.value} tyyppiä.",
            )
    return CheckResult()


def check_gpu_case_length(build: BuildState) -> CheckResult:
    gpu = build.get("gpu")
    pc_case = build.get("case")
    if gpu is None or pc_case is None:
        return CheckResult()

    length = E.extract_gpu_length(gpu)
    clearance = E.extract_case_gpu_clearance(pc_case)
    if length and clearance and length > clearance:
        return CheckResult(
            compatible=False,
            message=f"Näytönohjain on {length}mm pitkä, mutta kotelo tukee max {clearance}mm kortteja.",
        )
    return CheckResult()


def check_cooler_cpu_socket(build: BuildState) -> CheckResult:
    cpu = build.get("cpu")
    cooler = build.get("cooler")
    if cpu is None or cooler is None:
        return CheckResult()

    cpu_socket = E.extract_cpu_socket(cpu)
    supported = E.extract_cooler_sockets(cooler)
    if cpu_socket and supported and E.normalize_socket(cpu_socket) not in supported:
        return CheckResult(
            compatible=False,
            message=f"Jäähdytin ei tue {cpu_socket} kantaa. Tuetut kannat: {', '.join(supported)}.",
        )
    return CheckResult()


def check_memory_slot_availability(build: BuildState) -> CheckResult:
    motherboard = build.get("motherboard")
    memories = build.memory_components()
    if motherboard is None or not memories:
        return CheckResult()

    total_sticks = sum(E.extract_memory_stick_count(memory) for memory in memories)
    slots = E.extract_motherboard_memory_slots(motherboard)
    if slots and total_sticks > slots:
        return CheckResult(
            compatible=False,
            message=f"Muistikampoja on yhteensä {total_sticks} kpl, mutta emolevyssä on vain {slots} paikkaa.",
        )
    return CheckResult()


def check_form_factor(build: BuildState) -> CheckResult:
    motherboard = build.get("motherboard")
    pc_case = build.get("case")
    if motherboard is None or pc_case is None:
        return CheckResult()

    board_form_factor = E.extract_form_factor(motherboard)
    case_form_factors = E.extract_case_form_factors(pc_case)
    if board_form_factor and case_form_factors and board_form_factor not in case_form_factors:
        supported = ", ".join(form_factor.value for form_factor in case_form_factors)
        return CheckResult(
            compatible=False,
            message=f"Emolevy on {board_form_factor.value}, mutta kotelo tukee: {supported}.",
        )
    return CheckResult()


def check_cooler_case_height(build: BuildState) -> CheckResult:
    cooler = build.get("cooler")
    pc_case = build.get("case")
    if cooler is None or pc_case is None:
        return CheckResult()

    height = E.extract_cooler_height(cooler)
    clearance = E.extract_case_cooler_clearance(pc_case)
    if height and clearance and height > clearance:
        return CheckResult(
            compatible=False,
            message=f"Jäähdytin on {height}mm korkea, mutta kotelo tukee max {clearance}mm jäähdytintä.",
        )
    return CheckResult()


# Evaluation order is the display order
COMPATIBILITY_RULES: Tuple[Tuple[Severity, Callable[[BuildState], CheckResult]], ...] = (
    (Severity.CRITICAL, check_cpu_motherboard_socket),
    (Severity.CRITICAL, check_memory_motherboard_type),
    (Severity.CRITICAL, check_memory_cpu_type),
    (Severity.WARNING, check_gpu_case_length),
    (Severity.WARNING, check_cooler_cpu_socket),
    (Severity.CRITICAL, check_memory_slot_availability),
    (Severity.CRITICAL, check_form_factor),
    (Severity.WARNING, check_cooler_case_height),
)


# ---------------------------------------------------------------------------
# Power
# ---------------------------------------------------------------------------


def check_psu_wattage(psu: Optional[ProductRecord], system_power: int) -> CheckResult:
    """
    Compare the estimated draw with the PSU rating.

    Over the rating is CRITICAL; within PSU_HEADROOM_RATIO of it is a WARNING.
    """
    if psu is None:
        return CheckResult()

    wattage = E.extract_psu_wattage(psu)
    if not wattage or not system_power:
        return CheckResult()

    if system_power > wattage:
        return CheckResult(
            compatible=False,
            severity=Severity.CRITICAL,
            message=(
                f"Järjestelmän arvioitu tehonkulutus ({system_power}W) "
                f"ylittää virtalähteen tehon ({wattage}W)."
            ),
        )
    if system_power > wattage * PSU_HEADROOM_RATIO:
        return CheckResult(
            compatible=False,
            severity=Severity.WARNING,
            message=(
                f"Virtalähteen teho ({wattage}W) on lähellä järjestelmän arviota ({system_power}W). "
                f"Suositellaan vähintään 20% ylivaraa."
            ),
        )
    return CheckResult()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def run_all_compatibility_checks(build: BuildState, knowledge_base: KnowledgeBase) -> CompatibilityReport:
    """
    Run placement, pairwise and power checks over a build.

    Args:
        build: Current build snapshot
        knowledge_base: Hardware tables used by the power estimate

    Returns:
        CompatibilityReport; compatible is False iff a CRITICAL issue exists
    """
    issues: List[Issue] = validate_all_placements(build)

    for severity, rule in COMPATIBILITY_RULES:
        result = rule(build)
        if not result.compatible:
            issues.append(Issue(severity=severity, message=result.message))

    system_power = estimate_system_power(build, knowledge_base)
    psu_result = check_psu_wattage(build.get("psu"), system_power)
    if not psu_result.compatible:
        issues.append(Issue(severity=psu_result.severity, message=psu_result.message))

    compatible = not any(issue.is_critical for issue in issues)
    logger.debug(
        f"Checked {build.size} components: {len(issues)} issue(s), "
        f"estimated power {system_power}W, compatible={compatible}"
    )

    return CompatibilityReport(issues=issues, estimated_power=system_power, compatible=compatible)
