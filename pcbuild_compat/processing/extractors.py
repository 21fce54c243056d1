"""
Attribute extraction from free-form product spec sheets.

Every extractor reads one ProductRecord and returns a normalized fact, or None
when the fact cannot be determined from the available text. Resolution order:

1. spec entries whose lower-cased key contains one of the attribute's key terms
2. a value pattern applied to that entry
3. the product name, with the same or a looser pattern
4. for a few attributes, a model-family inference table

Key terms mix English and Finnish because the product feed does.
Extractors never fall back to a default value; defaults belong to the power
estimator.
"""
import re
from typing import Iterable, List, Match, Optional, Pattern, Sequence, Tuple

from pcbuild_compat.state.schema import FormFactor, MemoryType, ProductRecord
from pcbuild_compat.utils.config import KnowledgeBase


# ---------------------------------------------------------------------------
# Value patterns
# ---------------------------------------------------------------------------

SPACE_RE = re.compile(r"\s+")
SOCKET_RE = re.compile(r"(AM4|AM5|LGA\s*1700|LGA\s*1851|LGA\s*1200)", re.IGNORECASE)
DDR_RE = re.compile(r"(DDR[45])", re.IGNORECASE)
LENGTH_MM_RE = re.compile(r"(\d{2,4})(?:[.,]\d+)?\s*mm", re.IGNORECASE)
WATTAGE_RE = re.compile(r"(\d{2,4})\s*(?:watt\w*|w(?![a-zäöå]))", re.IGNORECASE)
SPEED_RE = re.compile(r"(\d{3,5})\s*(?:mhz|mt/s)", re.IGNORECASE)
NAME_SPEED_RE = re.compile(r"ddr[45][-\s]*(\d{3,5})", re.IGNORECASE)
STICK_KIT_RE = re.compile(r"(\d+)\s*[x×]\s*\d+\s*(?:gb|mb)", re.IGNORECASE)
STICK_COUNT_RE = re.compile(r"(\d+)\s*(?:kpl|pieces|sticks)", re.IGNORECASE)
SLOT_COUNT_RE = re.compile(r"(?<![\w.])(\d{1,2})(?!\d)")
FORM_FACTOR_TOKEN_RE = re.compile(
    r"e-?atx|micro[-\s]?atx|m-?atx|mini[-\s]?itx|m-?itx|atx", re.IGNORECASE
)

# ---------------------------------------------------------------------------
# Key synonyms (substrings of lower-cased spec keys)
# ---------------------------------------------------------------------------

CPU_SOCKET_KEYS = ("socket", "suoritinkanta")
MOTHERBOARD_SOCKET_KEYS = ("socket", "prosessorikanta", "suoritinkanta")
MOTHERBOARD_MEMORY_TYPE_KEYS = ("tuettu muistityyppi", "memory type", "supported memory")
CPU_MEMORY_TYPE_KEYS = ("muistityyppi", "memory type", "supported memory")
GPU_LENGTH_KEYS = ("pituus", "length")
# Finnish keys are matched on stems: "näytönohjaimen", "prosessorijäähdyttimen"
CASE_GPU_KEYS = ("gpu", "näytönohja")
CASE_GPU_LIMIT_KEYS = ("clearance", "max", "maks")
COOLER_SOCKET_KEYS = ("compatibility", "yhteensopiv", "socket")
FORM_FACTOR_KEYS = ("form factor", "muoto", "koko")
CASE_FORM_FACTOR_KEYS = ("form factor", "emolevy", "tuetut")
HEIGHT_KEYS = ("korkeus", "height")
CASE_COOLER_KEYS = ("cooler", "jäähdyt")
CASE_COOLER_LIMIT_KEYS = ("clearance", "max", "maks", "korkeus")
MEMORY_SLOT_KEYS = ("muistipaik", "memory slot", "dimm slot", "ram slot")
PSU_WATTAGE_KEYS = ("teho", "power", "watt")
TDP_KEYS = ("tdp", "tehokkuusluokka")
POWER_KEYS = ("teho", "power")
SUPPLY_KEYS = ("virtaläh", "supply")
GPU_POWER_KEYS = ("tdp", "tgp", "tbp", "power consumption", "board power", "tehonkulutus")
COOLER_INCLUDED_KEYS = ("cooler", "jäähdyt")
COOLER_INCLUDED_VALUES = ("kyllä", "yes", "included", "mukana")

# Largest draw still treated as a component's own consumption
MAX_COMPONENT_WATTS = 500

# ---------------------------------------------------------------------------
# Form factor tables
# ---------------------------------------------------------------------------

FORM_FACTOR_ORDER = (FormFactor.E_ATX, FormFactor.ATX, FormFactor.MICRO_ATX, FormFactor.MINI_ITX)

# Priority when a motherboard spec value mentions several form factors
SPEC_FORM_FACTOR_PRIORITY = (FormFactor.E_ATX, FormFactor.MICRO_ATX, FormFactor.MINI_ITX, FormFactor.ATX)
NAME_FORM_FACTOR_PRIORITY = (FormFactor.MINI_ITX, FormFactor.MICRO_ATX, FormFactor.E_ATX, FormFactor.ATX)

# Chassis size in the case name -> motherboards it takes
CASE_SIZE_TABLE: Tuple[Tuple[Tuple[str, ...], Tuple[FormFactor, ...]], ...] = (
    (("full tower",), FORM_FACTOR_ORDER),
    (("mid tower", "midi tower"), (FormFactor.ATX, FormFactor.MICRO_ATX, FormFactor.MINI_ITX)),
    (("mini tower", "micro"), (FormFactor.MICRO_ATX, FormFactor.MINI_ITX)),
    (("mini-itx", "itx"), (FormFactor.MINI_ITX,)),
)

# ---------------------------------------------------------------------------
# CPU generation tables
# ---------------------------------------------------------------------------

# Memory type a CPU family supports, first match wins. A None result means the
# family is known to be ambiguous and stops the lookup.
CPU_MEMORY_INFERENCE: Tuple[Tuple[Pattern, Optional[MemoryType]], ...] = (
    (re.compile(r"i[3579]-1[234]"), None),
    (re.compile(r"core ultra"), MemoryType.DDR5),
    (re.compile(r"^(?=.*ryzen).*[79]\d{3}"), MemoryType.DDR5),
    (re.compile(r"ryzen [35]000|i[3579]-1[01]"), MemoryType.DDR4),
)

# CPU families for which a faster memory kit is worth recommending
FAST_MEMORY_CPU_RE = re.compile(r"i[3579]-1[1-5]|core ultra|ryzen [579]000")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def _search_specs(
    record: ProductRecord,
    key_terms: Sequence[str],
    pattern: Pattern,
    exclude_terms: Sequence[str] = (),
) -> Optional[Match]:
    """First value match among spec entries whose key contains a key term."""
    for key, value in record.spec_items():
        if _contains_any(key, key_terms) and not _contains_any(key, exclude_terms):
            match = pattern.search(value)
            if match:
                return match
    return None


def _int_or_none(match: Optional[Match]) -> Optional[int]:
    if match is None:
        return None
    return int(match.group(1))


def _lower_name(record: ProductRecord) -> str:
    return record.name.lower()


def _form_factors_in(text: str) -> List[FormFactor]:
    """Form factors mentioned in text, in order of first appearance."""
    found: List[FormFactor] = []
    for match in FORM_FACTOR_TOKEN_RE.finditer(text):
        token = SPACE_RE.sub("-", match.group(0).lower())
        if token in ("e-atx", "eatx"):
            form_factor = FormFactor.E_ATX
        elif token in ("micro-atx", "microatx", "m-atx", "matx"):
            form_factor = FormFactor.MICRO_ATX
        elif token in ("mini-itx", "miniitx", "m-itx", "mitx"):
            form_factor = FormFactor.MINI_ITX
        else:
            form_factor = FormFactor.ATX
        if form_factor not in found:
            found.append(form_factor)
    return found


def _pick_form_factor(found: Sequence[FormFactor], priority: Sequence[FormFactor]) -> Optional[FormFactor]:
    for form_factor in priority:
        if form_factor in found:
            return form_factor
    return None


# ---------------------------------------------------------------------------
# Sockets
# ---------------------------------------------------------------------------


def normalize_socket(socket: str) -> str:
    """LGA 1700 / lga1700 -> LGA1700."""
    return SPACE_RE.sub("", socket).upper()


def _extract_socket(record: ProductRecord, key_terms: Sequence[str]) -> Optional[str]:
    match = _search_specs(record, key_terms, SOCKET_RE)
    if match is None:
        match = SOCKET_RE.search(record.name)
    if match is None:
        return None
    return normalize_socket(match.group(1))


def extract_cpu_socket(record: ProductRecord) -> Optional[str]:
    return _extract_socket(record, CPU_SOCKET_KEYS)


def extract_motherboard_socket(record: ProductRecord) -> Optional[str]:
    return _extract_socket(record, MOTHERBOARD_SOCKET_KEYS)


def extract_cooler_sockets(record: ProductRecord) -> Optional[List[str]]:
    """All sockets a cooler lists as supported, in listed order."""
    sockets: List[str] = []
    for key, value in record.spec_items():
        if not _contains_any(key, COOLER_SOCKET_KEYS):
            continue
        for token in SOCKET_RE.findall(value):
            socket = normalize_socket(token)
            if socket not in sockets:
                sockets.append(socket)
    return sockets or None


# ---------------------------------------------------------------------------
# Memory type
# ---------------------------------------------------------------------------


def _memory_type_in(text: str) -> Optional[MemoryType]:
    text = text.lower()
    if "ddr5" in text:
        return MemoryType.DDR5
    if "ddr4" in text:
        return MemoryType.DDR4
    return None


def extract_motherboard_memory_type(record: ProductRecord) -> Optional[MemoryType]:
    match = _search_specs(record, MOTHERBOARD_MEMORY_TYPE_KEYS, DDR_RE)
    if match is None:
        match = DDR_RE.search(record.name)
    if match is None:
        return None
    return MemoryType(match.group(1).upper())


def extract_memory_type(record: ProductRecord) -> Optional[MemoryType]:
    for _, value in record.spec_items():
        memory_type = _memory_type_in(value)
        if memory_type:
            return memory_type
    return _memory_type_in(record.name)


def extract_cpu_memory_type(record: ProductRecord) -> Optional[MemoryType]:
    """
    Memory type supported by a CPU.

    Uses the CPU's memory spec when present, otherwise CPU_MEMORY_INFERENCE on
    the name. Intel 12th-14th gen parts work with both DDR4 and DDR5 boards,
    so without a spec entry they stay undetermined.
    """
    for key, value in record.spec_items():
        if _contains_any(key, CPU_MEMORY_TYPE_KEYS):
            memory_type = _memory_type_in(value)
            if memory_type:
                return memory_type

    name = _lower_name(record)
    for pattern, memory_type in CPU_MEMORY_INFERENCE:
        if pattern.search(name):
            return memory_type
    return None


def cpu_supports_fast_memory(record: ProductRecord) -> bool:
    """True for CPU generations that benefit from DDR4-3200 or faster."""
    return bool(FAST_MEMORY_CPU_RE.search(_lower_name(record)))


# ---------------------------------------------------------------------------
# Physical dimensions
# ---------------------------------------------------------------------------


def extract_gpu_length(record: ProductRecord) -> Optional[int]:
    return _int_or_none(_search_specs(record, GPU_LENGTH_KEYS, LENGTH_MM_RE))


def extract_case_gpu_clearance(record: ProductRecord) -> Optional[int]:
    for key, value in record.spec_items():
        if _contains_any(key, CASE_GPU_KEYS) and _contains_any(key, CASE_GPU_LIMIT_KEYS):
            match = LENGTH_MM_RE.search(value)
            if match:
                return int(match.group(1))
    return None


def extract_cooler_height(record: ProductRecord) -> Optional[int]:
    return _int_or_none(_search_specs(record, HEIGHT_KEYS, LENGTH_MM_RE))


def extract_case_cooler_clearance(record: ProductRecord) -> Optional[int]:
    for key, value in record.spec_items():
        if _contains_any(key, CASE_COOLER_KEYS) and _contains_any(key, CASE_COOLER_LIMIT_KEYS):
            match = LENGTH_MM_RE.search(value)
            if match:
                return int(match.group(1))
    return None


# ---------------------------------------------------------------------------
# Form factors
# ---------------------------------------------------------------------------


def extract_form_factor(record: ProductRecord) -> Optional[FormFactor]:
    """Motherboard form factor from spec text, else from name tokens."""
    for key, value in record.spec_items():
        if _contains_any(key, FORM_FACTOR_KEYS):
            form_factor = _pick_form_factor(_form_factors_in(value), SPEC_FORM_FACTOR_PRIORITY)
            if form_factor:
                return form_factor
    return _pick_form_factor(_form_factors_in(record.name), NAME_FORM_FACTOR_PRIORITY)


def extract_case_form_factors(record: ProductRecord) -> Optional[List[FormFactor]]:
    """
    Motherboard form factors a case accepts.

    Explicit spec entries win; otherwise the chassis size named in the product
    name is looked up in CASE_SIZE_TABLE.
    """
    supported: List[FormFactor] = []
    for key, value in record.spec_items():
        if _contains_any(key, CASE_FORM_FACTOR_KEYS):
            for form_factor in _form_factors_in(value):
                if form_factor not in supported:
                    supported.append(form_factor)
    if supported:
        return [form_factor for form_factor in FORM_FACTOR_ORDER if form_factor in supported]

    name = _lower_name(record)
    for terms, form_factors in CASE_SIZE_TABLE:
        if _contains_any(name, terms):
            return list(form_factors)
    return None


# ---------------------------------------------------------------------------
# Memory sticks and slots
# ---------------------------------------------------------------------------


def extract_memory_stick_count(record: ProductRecord) -> int:
    """
    Number of modules in a memory product. A product that does not say
    otherwise is a single stick.
    """
    for _, value in record.spec_items():
        match = STICK_KIT_RE.search(value) or STICK_COUNT_RE.search(value)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))

    name = _lower_name(record)
    match = STICK_KIT_RE.search(name)
    if match and int(match.group(1)) > 0:
        return int(match.group(1))

    if "kit" in name or "setti" in name:
        if "dual" in name or "2x" in name:
            return 2
        if "quad" in name or "4x" in name:
            return 4
    return 1


def extract_motherboard_memory_slots(record: ProductRecord) -> int:
    for key, value in record.spec_items():
        is_slot_key = _contains_any(key, MEMORY_SLOT_KEYS) or ("dimm" in key and "so-dimm" not in key)
        if is_slot_key:
            match = SLOT_COUNT_RE.search(value)
            if match and int(match.group(1)) > 0:
                return int(match.group(1))

    name = _lower_name(record)
    if "mini-itx" in name or "mitx" in name or extract_form_factor(record) == FormFactor.MINI_ITX:
        return 2
    return 4


def extract_memory_speed(record: ProductRecord) -> Optional[int]:
    """Memory speed in MHz (MT/s)."""
    for _, value in record.spec_items():
        match = SPEED_RE.search(value)
        if match:
            return int(match.group(1))
    return _int_or_none(NAME_SPEED_RE.search(record.name))


# ---------------------------------------------------------------------------
# Power
# ---------------------------------------------------------------------------


def extract_psu_wattage(record: ProductRecord) -> Optional[int]:
    match = _search_specs(record, PSU_WATTAGE_KEYS, WATTAGE_RE)
    if match is None:
        match = WATTAGE_RE.search(record.name)
    return _int_or_none(match)


def extract_component_tdp(record: ProductRecord) -> Optional[int]:
    """
    A component's own power draw.

    An explicit TDP entry wins. Otherwise any power-like entry under
    MAX_COMPONENT_WATTS counts, skipping keys that describe a power supply's
    rated output.
    """
    tdp = _int_or_none(_search_specs(record, TDP_KEYS, WATTAGE_RE))
    if tdp is not None:
        return tdp

    for key, value in record.spec_items():
        if _contains_any(key, POWER_KEYS) and not _contains_any(key, SUPPLY_KEYS):
            match = WATTAGE_RE.search(value)
            if match and int(match.group(1)) < MAX_COMPONENT_WATTS:
                return int(match.group(1))
    return None


def extract_gpu_power(record: ProductRecord, knowledge_base: KnowledgeBase) -> Optional[int]:
    watts = _int_or_none(_search_specs(record, GPU_POWER_KEYS, WATTAGE_RE))
    if watts is not None:
        return watts

    name = _lower_name(record)
    for entry in knowledge_base.gpu_power:
        if entry.model in name:
            return entry.watts
    return None


def cpu_includes_cooler(record: ProductRecord) -> bool:
    """True when the CPU spec says a stock cooler is in the box."""
    for key, value in record.spec_items():
        if _contains_any(key, COOLER_INCLUDED_KEYS) and _contains_any(value.lower(), COOLER_INCLUDED_VALUES):
            return True
    return False


# ---------------------------------------------------------------------------
# Performance tiers
# ---------------------------------------------------------------------------


def get_cpu_tier(record: ProductRecord, knowledge_base: KnowledgeBase) -> Optional[int]:
    name = _lower_name(record)
    for entry in knowledge_base.cpu_tiers:
        if entry.matches(name):
            return entry.tier
    return None


def get_gpu_tier(record: ProductRecord, knowledge_base: KnowledgeBase) -> Optional[int]:
    name = _lower_name(record)
    for entry in knowledge_base.gpu_tiers:
        if entry.model in name:
            return entry.tier
    return None
