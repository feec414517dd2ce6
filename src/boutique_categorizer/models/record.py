"""Models for categorization records and the persisted mapping."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

from .category import PriceRange


class SizeBucket(str, Enum):
    """Garment size hint extracted from a filename."""

    XL = "XL"
    S = "S"
    M = "M"


class ProductMetadata(BaseModel):
    """Lightweight hints derived from an image filename.

    These are shown during manual review and are not part of the
    confidence calculation.
    """

    colors: list[str] = Field(default_factory=list, description="Color words found in the name")
    estimated_price: Optional[int] = Field(None, description="Price parsed from a price/cost/rs marker")
    size: Optional[SizeBucket] = Field(None, description="Size bucket")
    tier: Optional[str] = Field(None, description="Designer/premium/luxury/budget/economy")
    name: Optional[str] = Field(None, description="Product name searched alongside the filename")


class CategorizationRecord(BaseModel):
    """Categorization of one image, keyed by filename in the mapping.

    A bare category string (the legacy on-disk format) validates into a
    record with ``legacy=True`` and no confidence, and is written back out
    as the same string.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    category: str = Field(..., description="Category key")
    display_name: Optional[str] = None
    description: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0, le=100, description="Match strength 0-100")
    tags: Optional[list[str]] = None
    seasonal_fit: Optional[list[str]] = None
    color_category: Optional[list[str]] = None
    suggested_keywords: Optional[list[str]] = None
    suggested_price_range: Optional[PriceRange] = None

    # Review state
    needs_review: Optional[bool] = None

    # Provenance
    auto_generated: Optional[bool] = None
    timestamp: Optional[datetime] = None
    manually_reviewed: Optional[bool] = None
    reviewed_at: Optional[datetime] = None

    # Manual-entry extensions
    custom_price_range: Optional[PriceRange] = None
    additional_tags: Optional[list[str]] = None

    legacy: bool = Field(False, exclude=True, description="Read from a bare category string")

    @model_validator(mode="before")
    @classmethod
    def _from_legacy_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"category": data, "legacy": True}
        return data

    def to_entry(self) -> Union[str, dict[str, Any]]:
        """Serialize to the on-disk mapping value."""
        if self.legacy:
            return self.category
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @property
    def flagged_for_review(self) -> bool:
        return bool(self.needs_review)

    @property
    def all_tags(self) -> list[str]:
        """Category tags followed by any manually added tags."""
        return list(self.tags or []) + list(self.additional_tags or [])


PersistedMapping = dict[str, CategorizationRecord]

_mapping_adapter = TypeAdapter(PersistedMapping)


def mapping_from_json(data: Any) -> PersistedMapping:
    """Validate a decoded JSON object into a mapping of records.

    Raises:
        pydantic.ValidationError: If the document is not a filename mapping
    """
    return _mapping_adapter.validate_python(data)


def mapping_to_json(mapping: PersistedMapping) -> dict[str, Any]:
    """Convert a mapping of records into a JSON-ready object."""
    return {filename: record.to_entry() for filename, record in mapping.items()}
