"""
Advisory suggestions for a build.

Independent of the rule set: some facts (memory overcommit, memory type
mismatch) show up both as a blocking issue and here as a hint. The order of the
returned list follows the order of the checks below.
"""
from typing import List, Optional

from pcbuild_compat.processing import extractors as E
from pcbuild_compat.processing.power import estimate_system_power
from pcbuild_compat.state.schema import BuildState, MemoryType, ProductRecord
from pcbuild_compat.utils.config import KnowledgeBase

BOTTLENECK_TIER_GAP = 3
RECOMMENDED_MEMORY_SPEED = 3200
PSU_NEAR_MAX_RATIO = 0.9
PSU_OVERSIZED_RATIO = 0.4

CPU_STRONGER_MESSAGE = (
    "Prosessori on selvästi tehokkaampi kuin näytönohjain. "
    "Tehokkaampi GPU parantaisi pelisuorituskykyä."
)
GPU_STRONGER_MESSAGE = (
    "Näytönohjain on selvästi tehokkaampi kuin prosessori. "
    "CPU voi pullonkaulata GPU:n suorituskykyä."
)
MEMORY_SPEED_MESSAGE = "SUOSITUS: Harkitse nopeampaa muistia (DDR4-3200 tai nopeampi) parempaan suorituskykyyn."
PSU_NEAR_MAX_MESSAGE = "VAROITUS: Virtalähde on lähellä maksimitehoaan. Harkitse tehokkaampaa virtalähdettä."
PSU_OVERSIZED_MESSAGE = "HUOMIO: Virtalähde on ylimitoitettu. Pienempi virtalähde olisi energiatehokkaampi."
MISSING_COOLER_MESSAGE = "TÄRKEÄÄ: Prosessori tarvitsee erillisen jäähdyttimen!"
MISSING_STORAGE_MESSAGE = "MUISTUTUS: Järjestelmä tarvitsee tallennustilan (SSD/HDD)."


def check_memory_compatibility(cpu: ProductRecord, memory: ProductRecord) -> Optional[str]:
    """Advisory text when a memory kit's type differs from what the CPU supports."""
    cpu_type = E.extract_cpu_memory_type(cpu)
    memory_type = E.extract_memory_type(memory)
    if cpu_type is None or memory_type is None or cpu_type == memory_type:
        return None
    if cpu_type == MemoryType.DDR4:
        return "Muisti on DDR5, mutta prosessori tukee vain DDR4. Valitse DDR4-muisti."
    return "Muisti on DDR4, mutta prosessori tukee vain DDR5. Valitse DDR5-muisti."


def analyze_bottleneck(cpu: ProductRecord, gpu: ProductRecord, knowledge_base: KnowledgeBase) -> Optional[str]:
    """
    Compare CPU and GPU tiers. A gap of BOTTLENECK_TIER_GAP or more in either
    direction produces a directional hint.
    """
    cpu_tier = E.get_cpu_tier(cpu, knowledge_base)
    gpu_tier = E.get_gpu_tier(gpu, knowledge_base)
    if cpu_tier is None or gpu_tier is None:
        return None

    diff = cpu_tier - gpu_tier
    if diff >= BOTTLENECK_TIER_GAP:
        return CPU_STRONGER_MESSAGE
    if diff <= -BOTTLENECK_TIER_GAP:
        return GPU_STRONGER_MESSAGE
    return None


def generate_suggestions(build: BuildState, knowledge_base: KnowledgeBase) -> List[str]:
    """
    Produce non-blocking recommendations for a build.

    Args:
        build: Current build snapshot
        knowledge_base: Tier and GPU power tables

    Returns:
        Suggestion strings in fixed evaluation order
    """
    suggestions: List[str] = []
    cpu = build.get("cpu")
    gpu = build.get("gpu")
    memory = build.get("memory")
    motherboard = build.get("motherboard")
    psu = build.get("psu")

    if memory is not None and motherboard is not None:
        sticks = E.extract_memory_stick_count(memory)
        slots = E.extract_motherboard_memory_slots(motherboard)
        if sticks > slots:
            suggestions.append(
                f"VAROITUS: Muistikampoja on {sticks} kpl, mutta emolevyssä on vain {slots} paikkaa."
            )

    if cpu is not None and memory is not None:
        mismatch = check_memory_compatibility(cpu, memory)
        if mismatch:
            suggestions.append(f"KRIITTINEN: {mismatch}")

    if cpu is not None and gpu is not None:
        bottleneck = analyze_bottleneck(cpu, gpu, knowledge_base)
        if bottleneck:
            suggestions.append(bottleneck)

    if cpu is not None and memory is not None:
        speed = E.extract_memory_speed(memory)
        if E.cpu_supports_fast_memory(cpu) and (not speed or speed < RECOMMENDED_MEMORY_SPEED):
            suggestions.append(MEMORY_SPEED_MESSAGE)

    if psu is not None and gpu is not None:
        wattage = E.extract_psu_wattage(psu)
        system_power = estimate_system_power(build, knowledge_base)
        if wattage and system_power:
            load = system_power / wattage
            if load > PSU_NEAR_MAX_RATIO:
                suggestions.append(PSU_NEAR_MAX_MESSAGE)
            elif load < PSU_OVERSIZED_RATIO:
                suggestions.append(PSU_OVERSIZED_MESSAGE)

    if cpu is not None and not build.has("cooler") and not E.cpu_includes_cooler(cpu):
        suggestions.append(MISSING_COOLER_MESSAGE)

    if not build.storage_components():
        suggestions.append(MISSING_STORAGE_MESSAGE)

    return suggestions
