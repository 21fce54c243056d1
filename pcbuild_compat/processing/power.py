"""
System power estimate.

Additive model over the parts present in the build. Defaults apply only when a
CPU or GPU is present but its own draw cannot be read from its record.
"""
from pcbuild_compat.processing.extractors import (
    extract_component_tdp,
    extract_gpu_power,
    extract_memory_stick_count,
)
from pcbuild_compat.state.schema import BuildState
from pcbuild_compat.utils.config import KnowledgeBase

DEFAULT_CPU_WATTS = 65
DEFAULT_GPU_WATTS = 150
WATTS_PER_MEMORY_STICK = 5
WATTS_PER_STORAGE_DRIVE = 5
COOLER_WATTS = 10
BASELINE_WATTS = 50


def estimate_system_power(build: BuildState, knowledge_base: KnowledgeBase) -> int:
    """
    Estimate total system draw in watts.

    Args:
        build: Current build snapshot
        knowledge_base: Used for the GPU model -> power lookup

    Returns:
        Estimated draw; 0 for an empty build
    """
    total = 0

    cpu = build.get("cpu")
    if cpu is not None:
        total += extract_component_tdp(cpu) or DEFAULT_CPU_WATTS

    gpu = build.get("gpu")
    if gpu is not None:
        total += extract_gpu_power(gpu, knowledge_base) or DEFAULT_GPU_WATTS

    sticks = sum(extract_memory_stick_count(memory) for memory in build.memory_components())
    total += sticks * WATTS_PER_MEMORY_STICK

    total += len(build.storage_components()) * WATTS_PER_STORAGE_DRIVE

    if build.has("cooler"):
        total += COOLER_WATTS

    if not build.is_empty:
        total += BASELINE_WATTS

    return total
