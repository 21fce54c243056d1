"""
Configuration loader for the compatibility engine.

Loads the two static reference tables from YAML:

- config/hardware.yaml: the Knowledge Base (GPU power draw, GPU tiers, CPU tiers)
- config/specs.yaml: the spec filtering/display table

Both are returned as immutable objects and passed explicitly to whatever needs
them; nothing is cached at module level.
"""
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pcbuild_compat.utils.logger import get_logger

load_dotenv()

logger = get_logger("utils.config")

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_HARDWARE_PATH = PROJECT_ROOT / "config" / "hardware.yaml"
DEFAULT_SPECS_PATH = PROJECT_ROOT / "config" / "specs.yaml"

HARDWARE_SECTIONS = ("gpu_power", "gpu_tiers", "cpu_tiers")
SPECS_SECTIONS = ("exclude_patterns", "important_spec_keys", "category_key_specs", "category_display_names")


class GpuPowerEntry(BaseModel):
    """GPU model substring -> typical board power in watts."""
    model_config = ConfigDict(frozen=True)

    model: str
    watts: int

    @field_validator("model")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.lower()


class GpuTierEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    tier: int

    @field_validator("model")
    @classmethod
    def _lower(cls, value: str) -> str:
        return value.lower()


class CpuTierEntry(BaseModel):
    """
    CPU tier rule. Matches the lower-cased product name either with a regular
    expression (``pattern``) or a plain substring (``keyword``).
    """
    model_config = ConfigDict(frozen=True)

    pattern: Optional[str] = None
    keyword: Optional[str] = None
    tier: int

    @field_validator("pattern")
    @classmethod
    def _compiles(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"Invalid cpu_tiers pattern {value!r}: {e}") from e
        return value

    @field_validator("keyword")
    @classmethod
    def _lower(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value is not None else None

    @model_validator(mode="after")
    def _has_matcher(self) -> "CpuTierEntry":
        if not self.pattern and not self.keyword:
            raise ValueError("cpu_tiers entry needs a 'pattern' or a 'keyword'")
        return self

    def matches(self, name: str) -> bool:
        if self.pattern and re.search(self.pattern, name):
            return True
        if self.keyword and self.keyword in name:
            return True
        return False


class KnowledgeBase(BaseModel):
    """
    Hardware reference tables. Entry order is significant: lookups return the
    first entry whose model substring (or pattern) matches.
    """
    model_config = ConfigDict(frozen=True)

    gpu_power: Tuple[GpuPowerEntry, ...] = ()
    gpu_tiers: Tuple[GpuTierEntry, ...] = ()
    cpu_tiers: Tuple[CpuTierEntry, ...] = ()


class SpecDisplayTable(BaseModel):
    """Key substrings driving which spec rows are shown for a product."""
    model_config = ConfigDict(frozen=True)

    exclude_patterns: Tuple[str, ...] = ()
    important_spec_keys: Tuple[str, ...] = ()
    category_key_specs: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)
    category_display_names: Dict[str, str] = Field(default_factory=dict)

    @field_validator("exclude_patterns", "important_spec_keys")
    @classmethod
    def _lower_all(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(item.lower() for item in value)


def _resolve_path(path: Optional[Path], env_var: str, default: Path) -> Path:
    if path is not None:
        return Path(path)
    override = os.getenv(env_var)
    if override:
        return Path(override)
    return default


def _load_yaml(config_path: Path, required_sections: Tuple[str, ...]) -> Dict[str, Any]:
    """Load a YAML mapping and check that the required sections exist."""
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please ensure the file exists or point the matching PCBUILD_* "
            f"environment variable at it."
        )

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")

    for section in required_sections:
        if section not in data:
            raise ValueError(f"Missing required configuration section: {section} ({config_path})")

    return data


def load_knowledge_base(path: Optional[Path] = None) -> KnowledgeBase:
    """
    Load the hardware Knowledge Base.

    Args:
        path: Explicit YAML path. Falls back to $PCBUILD_HARDWARE_CONFIG,
            then config/hardware.yaml in the project root.

    Returns:
        Immutable KnowledgeBase

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a required section is missing or an entry is malformed
    """
    config_path = _resolve_path(path, "PCBUILD_HARDWARE_CONFIG", DEFAULT_HARDWARE_PATH)
    data = _load_yaml(config_path, HARDWARE_SECTIONS)
    knowledge_base = KnowledgeBase.model_validate(data)
    logger.info(
        f"Loaded knowledge base from {config_path}: "
        f"{len(knowledge_base.gpu_power)} GPU power, {len(knowledge_base.gpu_tiers)} GPU tier, "
        f"{len(knowledge_base.cpu_tiers)} CPU tier entries"
    )
    return knowledge_base


def load_display_table(path: Optional[Path] = None) -> SpecDisplayTable:
    """Load the spec filtering/display table (config/specs.yaml by default)."""
    config_path = _resolve_path(path, "PCBUILD_SPECS_CONFIG", DEFAULT_SPECS_PATH)
    data = _load_yaml(config_path, SPECS_SECTIONS)
    table = SpecDisplayTable.model_validate(data)
    logger.info(f"Loaded spec display table from {config_path}")
    return table
