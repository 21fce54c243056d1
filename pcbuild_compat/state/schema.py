"""
State schema for the PC build compatibility engine.

ProductRecord and BuildState are immutable snapshots: the orchestrator that owns
the build replaces them, the engine only reads them.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Base slots in the order the build form lists them
BASE_SLOTS = ("cpu", "motherboard", "memory", "gpu", "psu", "case", "cooler", "storage")

# Slots that accept additional numbered instances (memory-1, storage-2, ...)
MULTI_SLOTS = ("memory", "storage")

CATEGORIES = BASE_SLOTS + ("unknown",)

_SLOT_RE = re.compile(r"^(cpu|motherboard|memory|gpu|psu|case|cooler|storage)$")
_SUFFIXED_SLOT_RE = re.compile(r"^(memory|storage)-([1-9]\d*)$")

EXPORT_VERSION = "1.0"


def parse_slot(slot: str) -> Tuple[Optional[str], Optional[int]]:
    """
    Split a slot identifier into its base slot and numeric suffix.

    Returns (None, None) for strings that are not slot identifiers.
    """
    if not isinstance(slot, str):
        return None, None
    if _SLOT_RE.match(slot):
        return slot, None
    match = _SUFFIXED_SLOT_RE.match(slot)
    if match:
        return match.group(1), int(match.group(2))
    return None, None


def is_valid_slot(slot: str) -> bool:
    base, _ = parse_slot(slot)
    return base is not None


class Severity(str, Enum):
    """Issue severity. Only CRITICAL blocks overall compatibility."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"

    @property
    def label(self) -> str:
        return SEVERITY_LABELS[self]


SEVERITY_LABELS = {
    Severity.CRITICAL: "KRIITTINEN",
    Severity.WARNING: "VAROITUS",
}


class MemoryType(str, Enum):
    DDR4 = "DDR4"
    DDR5 = "DDR5"


class FormFactor(str, Enum):
    ATX = "ATX"
    MICRO_ATX = "Micro-ATX"
    MINI_ITX = "Mini-ITX"
    E_ATX = "E-ATX"


class ProductRecord(BaseModel):
    """One hardware item as returned by the product lookup."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    product_code: str = Field("", alias="productCode")
    category: Optional[str] = None
    specs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name", "product_code", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("specs", mode="before")
    @classmethod
    def _coerce_specs(cls, value: Any) -> Dict[str, Any]:
        # Spec sheets occasionally arrive as lists of [key, value] pairs
        if value is None:
            return {}
        if isinstance(value, (list, tuple)):
            return {str(pair[0]): pair[1] for pair in value if isinstance(pair, (list, tuple)) and len(pair) == 2}
        return value

    def spec_items(self) -> Iterator[Tuple[str, str]]:
        """Yield (lower-cased key, value as text) pairs."""
        for key, value in self.specs.items():
            yield str(key).lower(), "" if value is None else str(value)


class BuildState(BaseModel):
    """
    Snapshot of the current build: slot -> product plus the highest allocated
    memory/storage suffix.

    Counters are raised to the highest suffix present so every occupied
    suffixed slot is reachable through memory_components()/storage_components().
    """
    model_config = ConfigDict(frozen=True)

    components: Dict[str, ProductRecord] = Field(default_factory=dict)
    memory_counter: int = 0
    storage_counter: int = 0

    @model_validator(mode="before")
    @classmethod
    def _raise_counters(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        components = data.get("components") or {}
        for base in MULTI_SLOTS:
            suffixes = [
                suffix for suffix_base, suffix in (parse_slot(slot) for slot in components)
                if suffix_base == base and suffix is not None
            ]
            field_name = f"{base}_counter"
            current = data.get(field_name) or 0
            data[field_name] = max([int(current)] + suffixes)
        return data

    @field_validator("components")
    @classmethod
    def _validate_slots(cls, value: Dict[str, ProductRecord]) -> Dict[str, ProductRecord]:
        invalid = [slot for slot in value if not is_valid_slot(slot)]
        if invalid:
            raise ValueError(f"Invalid slot identifier(s): {', '.join(map(str, invalid))}")
        return value

    @property
    def size(self) -> int:
        return len(self.components)

    @property
    def is_empty(self) -> bool:
        return not self.components

    def get(self, slot: str) -> Optional[ProductRecord]:
        return self.components.get(slot)

    def has(self, slot: str) -> bool:
        return slot in self.components

    def _instances(self, base: str, counter: int) -> List[ProductRecord]:
        instances = []
        if base in self.components:
            instances.append(self.components[base])
        for index in range(1, counter + 1):
            record = self.components.get(f"{base}-{index}")
            if record is not None:
                instances.append(record)
        return instances

    def memory_components(self) -> List[ProductRecord]:
        """All memory instances: `memory` first, then memory-1..memory-N."""
        return self._instances("memory", self.memory_counter)

    def storage_components(self) -> List[ProductRecord]:
        return self._instances("storage", self.storage_counter)

    def with_component(self, slot: str, record: ProductRecord) -> "BuildState":
        components = dict(self.components)
        components[slot] = record
        return BuildState(
            components=components,
            memory_counter=self.memory_counter,
            storage_counter=self.storage_counter,
        )

    def without_component(self, slot: str) -> "BuildState":
        components = {key: value for key, value in self.components.items() if key != slot}
        return BuildState(
            components=components,
            memory_counter=self.memory_counter,
            storage_counter=self.storage_counter,
        )

    @classmethod
    def from_export(cls, payload: Dict[str, Any]) -> "BuildState":
        """
        Build a snapshot from an exported build file.

        Args:
            payload: Parsed export JSON with a ``components`` list of
                ``{type, name, productCode, category, specs}`` entries

        Returns:
            BuildState with counters derived from the suffixed slots present

        Raises:
            ValueError: If the payload or one of its component entries is not
                a JSON object, or ``components`` is not a list
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Build export must be a JSON object, got {type(payload).__name__}")
        entries = payload.get("components") or []
        if not isinstance(entries, list):
            raise ValueError("Build export 'components' must be a list")

        components: Dict[str, ProductRecord] = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ValueError(f"Component entry {index} must be a JSON object")
            slot = entry.get("type")
            if not isinstance(slot, str):
                raise ValueError(f"Component entry {index} has no slot type")
            components[slot] = ProductRecord(
                name=entry.get("name"),
                productCode=entry.get("productCode"),
                category=entry.get("category"),
                specs=entry.get("specs"),
            )
        return cls(components=components)

    def to_export(self, mode: str = "simple") -> Dict[str, Any]:
        return {
            "components": [
                {
                    "type": slot,
                    "name": record.name,
                    "productCode": record.product_code,
                    "category": record.category,
                    "specs": dict(record.specs),
                }
                for slot, record in self.components.items()
            ],
            "mode": mode,
            "exportDate": datetime.now().isoformat(),
            "version": EXPORT_VERSION,
        }


class Issue(BaseModel):
    """A compatibility problem found by the rule set."""
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL

    def __str__(self) -> str:
        return f"{self.severity.label}: {self.message}"


class CheckResult(BaseModel):
    """Outcome of a single pairwise/aggregate rule."""
    model_config = ConfigDict(frozen=True)

    compatible: bool = True
    message: Optional[str] = None
    # Only the power rule picks its own severity
    severity: Optional[Severity] = None


class PlacementResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool = True
    message: Optional[str] = None


class CompatibilityReport(BaseModel):
    """Result of running the full rule pipeline over a build."""
    model_config = ConfigDict(frozen=True)

    issues: List[Issue] = Field(default_factory=list)
    estimated_power: int = 0
    compatible: bool = True

    @property
    def critical_issues(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.is_critical]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if not issue.is_critical]
