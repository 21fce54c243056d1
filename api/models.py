"""
Pydantic models for API requests and responses.
"""
from pydantic import BaseModel, field_validator
from typing import Optional, Dict, Any, List

from pcbuild_compat.state.schema import BuildState, Issue, ProductRecord, is_valid_slot


class BuildRequest(BaseModel):
    """Request model carrying a build snapshot."""
    build: BuildState


class CompatibilityResponse(BaseModel):
    """Response model for the full compatibility check."""
    compatible: bool
    estimated_power: int
    issues: List[Issue]
    suggestions: List[str] = []  # Advisory hints, never block the build


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class PlacementRequest(BaseModel):
    """Request model for validating a product against a slot."""
    slot: str
    product: ProductRecord

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v: str) -> str:
        """Reject slot identifiers the build form does not have."""
        if not is_valid_slot(v):
            raise ValueError(f"Invalid slot identifier: {v}")
        return v


class PlacementResponse(BaseModel):
    valid: bool
    message: Optional[str] = None
    category: str  # Category the classifier assigned to the product


class ProductRequest(BaseModel):
    product: ProductRecord


class ClassifyResponse(BaseModel):
    category: str


class AttributesResponse(BaseModel):
    """Every fact the engine reads from the product; undeterminable facts are null."""
    attributes: Dict[str, Any]
