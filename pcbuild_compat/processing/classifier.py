"""
Category classification for product records.

The category is decided by an ordered table of (category, predicate) pairs;
the first predicate that accepts the record wins. Order matters: a cooler named
"CPU Cooler" must not become a CPU, and a wattage in a name must not turn a
GPU into a power supply.
"""
import re
from typing import Callable, Dict, Iterable, Tuple

from pcbuild_compat.state.schema import ProductRecord

INTEL_MODEL_RE = re.compile(r"i[3579]-\d+")
WATTAGE_TOKEN_RE = re.compile(r"\d+\s*w\b")
CAPACITY_TOKEN_RE = re.compile(r"\d+\s*(gb|tb)", re.IGNORECASE)


def _has(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def _spec_keys(record: ProductRecord) -> Tuple[str, ...]:
    return tuple(str(key).lower() for key in record.specs)


def _is_cooler(name: str, record: ProductRecord) -> bool:
    return _has(name, ("jäähdytin", "cooler", "cooling")) or ("fan" in name and "cpu" in name)


def _is_cpu(name: str, record: ProductRecord) -> bool:
    if "prosessori" in name and "prosessorin" not in name:
        return True
    return _has(name, ("processor", "cpu", "ryzen", "intel")) or bool(INTEL_MODEL_RE.search(name))


def _is_gpu(name: str, record: ProductRecord) -> bool:
    if "graphics" in name and "integrated" not in name:
        return True
    return _has(name, ("geforce", "radeon", "rtx", "gtx", "rx ", "näytönohjain"))


def _is_motherboard(name: str, record: ProductRecord) -> bool:
    return _has(name, ("motherboard", "emolevy", "mainboard"))


def _is_memory(name: str, record: ProductRecord) -> bool:
    has_ddr = _has(name, ("ddr4", "ddr5"))
    if not has_ddr:
        return False
    has_memory_terms = _has(name, ("muisti", "memory", "ram", "dimm"))
    is_memory_kit = "kit" in name
    has_memory_specs = any(
        "muistityyppi" in key or "memory type" in key or ("speed" in key and "mhz" in key)
        for key in _spec_keys(record)
    )
    return has_memory_terms or is_memory_kit or has_memory_specs


def _is_psu(name: str, record: ProductRecord) -> bool:
    if _has(name, ("virtalähdeyksikkö", "virtalähde", "power supply", "psu")):
        return True
    if WATTAGE_TOKEN_RE.search(name) and _has(name, ("modular", "atx", "bronze", "gold", "supply", "unit")):
        return True
    return any(_has(key, ("teho", "efficiency", "modular")) for key in _spec_keys(record))


def _is_case(name: str, record: ProductRecord) -> bool:
    if _has(name, ("kotelo", "chassis")):
        return True
    if "case" in name and "briefcase" not in name and "showcase" not in name:
        return True
    if "tower" in name and _has(name, ("mid", "full", "mini")):
        return True
    return "atx" in name and "power" not in name


def _is_storage(name: str, record: ProductRecord) -> bool:
    if _has(name, ("ssd", "hdd", "nvme", "tallennustila", "kiintolevy")):
        return True
    if CAPACITY_TOKEN_RE.search(name) and _has(name, ("sata", "m.2", "drive", "storage")):
        return True
    return any(
        _has(key, ("kapasiteetti", "interface", "read speed", "write speed"))
        for key in _spec_keys(record)
    )


CATEGORY_RULES: Tuple[Tuple[str, Callable[[str, ProductRecord], bool]], ...] = (
    ("cooler", _is_cooler),
    ("cpu", _is_cpu),
    ("gpu", _is_gpu),
    ("motherboard", _is_motherboard),
    ("memory", _is_memory),
    ("psu", _is_psu),
    ("case", _is_case),
    ("storage", _is_storage),
)


def determine_actual_category(record: ProductRecord) -> str:
    """
    Classify a product record into one of the eight part categories.

    Returns:
        The category name, or "unknown" when no rule matches
    """
    name = record.name.lower()
    for category, predicate in CATEGORY_RULES:
        if predicate(name, record):
            return category
    return "unknown"


classify = determine_actual_category


def classify_many(records: Dict[str, ProductRecord]) -> Dict[str, str]:
    """Classify every record of a slot -> record mapping."""
    return {slot: determine_actual_category(record) for slot, record in records.items()}
