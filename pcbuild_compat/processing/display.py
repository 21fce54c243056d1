"""
Spec display helpers.

Pick and tidy the spec rows worth showing for a product. Driven only by the
SpecDisplayTable; nothing in the compatibility logic depends on this module.
"""
import re
from typing import Any, Dict, Iterable, List, Tuple

from pcbuild_compat.processing.classifier import determine_actual_category
from pcbuild_compat.state.schema import ProductRecord, parse_slot
from pcbuild_compat.utils.config import SpecDisplayTable

MAX_VALUE_LENGTH = 150
MAX_IMPORTANT_SPECS = 8
MAX_CATEGORY_KEY_SPECS = 3

# Scraped spec values lose the space between joined words: "SuoritinkantaAM5"
LOWER_UPPER_RE = re.compile(r"([a-zäöå])([A-ZÄÖÅ])")
DIGIT_WORD_RE = re.compile(r"(\d)([A-ZÄÖÅ][a-zäöå])")

# Labels for numbered memory/storage slots
NUMBERED_SLOT_LABELS = {
    "memory": "Muisti",
    "storage": "Tallennustila",
}

SpecRow = Tuple[str, str]


def clean_spec_value(value: Any) -> str:
    cleaned = str(value).strip()
    if len(cleaned) > MAX_VALUE_LENGTH:
        cleaned = cleaned[:MAX_VALUE_LENGTH] + "..."
    cleaned = LOWER_UPPER_RE.sub(r"\1 \2", cleaned)
    cleaned = DIGIT_WORD_RE.sub(r"\1 \2", cleaned)
    return cleaned


def filter_relevant_specs(rows: Iterable[Tuple[str, Any]], table: SpecDisplayTable) -> List[SpecRow]:
    """Drop rows whose key matches an exclude pattern and clean the values."""
    relevant = []
    for key, value in rows:
        lowered = str(key).lower()
        if any(pattern in lowered for pattern in table.exclude_patterns):
            continue
        relevant.append((str(key), clean_spec_value(value)))
    return relevant


def get_important_specs(specs: Dict[str, Any], table: SpecDisplayTable) -> List[SpecRow]:
    important = [
        (key, value) for key, value in specs.items()
        if any(term in str(key).lower() for term in table.important_spec_keys)
    ]
    return filter_relevant_specs(important, table)[:MAX_IMPORTANT_SPECS]


def get_category_key_specs(record: ProductRecord, table: SpecDisplayTable) -> List[SpecRow]:
    """Up to three headline spec rows for the product's classified category."""
    category = determine_actual_category(record)
    keywords = table.category_key_specs.get(category, ())
    rows = []
    for key, value in record.specs.items():
        lowered = str(key).lower()
        if any(keyword in lowered for keyword in keywords):
            rows.append((str(key), clean_spec_value(value)))
    return rows[:MAX_CATEGORY_KEY_SPECS]


def get_expert_specs(record: ProductRecord, table: SpecDisplayTable) -> List[SpecRow]:
    """Important rows, or the first relevant rows when none are marked important."""
    important = get_important_specs(record.specs, table)
    if important:
        return important
    return filter_relevant_specs(record.specs.items(), table)[:MAX_IMPORTANT_SPECS]


def get_category_display_name(category: str, table: SpecDisplayTable) -> str:
    return table.category_display_names.get(category, category)


def slot_display_name(slot: str, record: ProductRecord, table: SpecDisplayTable) -> str:
    """Summary label: "Muisti 2" for memory-2, else the category's display name."""
    base, suffix = parse_slot(slot)
    if suffix is not None and base in NUMBERED_SLOT_LABELS:
        return f"{NUMBERED_SLOT_LABELS[base]} {suffix}"
    return get_category_display_name(record.category or base or "unknown", table)
