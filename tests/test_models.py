"""Tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from boutique_categorizer.models import (
    CategorizationRecord,
    CategoryDefinition,
    PriceRange,
    ReviewMode,
    SizeBucket,
    mapping_from_json,
    mapping_to_json,
)


def test_legacy_string_becomes_record():
    """Test that a bare category string validates into a legacy record."""
    record = CategorizationRecord.model_validate("saree")

    assert record.category == "saree"
    assert record.legacy is True
    assert record.confidence is None
    assert record.flagged_for_review is False


def test_legacy_record_serializes_as_string():
    """Test that legacy records are written back unchanged."""
    record = CategorizationRecord.model_validate("saree")
    assert record.to_entry() == "saree"


def test_record_uses_camel_case_keys():
    """Test persisted key names."""
    record = CategorizationRecord(
        category="kurti",
        display_name="Stylish Kurti",
        confidence=75.0,
        seasonal_fit=["all-season"],
        auto_generated=True,
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )

    entry = record.to_entry()

    assert entry["displayName"] == "Stylish Kurti"
    assert entry["seasonalFit"] == ["all-season"]
    assert entry["autoGenerated"] is True
    assert "needsReview" not in entry
    assert "legacy" not in entry


def test_record_reads_camel_case_keys():
    """Test loading a record written by an earlier version of the tool."""
    record = CategorizationRecord.model_validate({
        "category": "gown",
        "displayName": "Evening Gown",
        "needsReview": True,
        "confidence": 42.5,
        "suggestedPriceRange": {"min": 10000, "max": 30000},
    })

    assert record.display_name == "Evening Gown"
    assert record.needs_review is True
    assert record.suggested_price_range == PriceRange(min=10000, max=30000)


def test_record_keeps_unknown_fields():
    """Test that fields this version does not know survive a round trip."""
    record = CategorizationRecord.model_validate({"category": "gown", "notes": "check hem"})
    assert record.to_entry()["notes"] == "check hem"


def test_record_rejects_out_of_range_confidence():
    """Test confidence bounds."""
    with pytest.raises(ValidationError):
        CategorizationRecord(category="gown", confidence=120)


def test_all_tags_merges_additional_tags():
    """Test tag union used by the product export."""
    record = CategorizationRecord(category="kurti", tags=["casual"], additional_tags=["cotton"])
    assert record.all_tags == ["casual", "cotton"]


def test_mapping_json_conversion():
    """Test mapping conversion with both entry variants."""
    data = {"a.jpg": "lehenga", "b.jpg": {"category": "kurti", "confidence": 80.0}}

    mapping = mapping_from_json(data)

    assert mapping["a.jpg"].legacy is True
    assert mapping["b.jpg"].legacy is False
    assert mapping_to_json(mapping) == data


def test_price_range_order():
    """Test that min may not exceed max."""
    with pytest.raises(ValidationError):
        PriceRange(min=500, max=100)


def test_category_definition_keywords():
    """Test keyword normalization and validation."""
    definition = CategoryDefinition(
        key="hat",
        display_name="Hat",
        description="Headwear",
        keywords=["Hat", "CAP"],
        price_range={"min": 1, "max": 2},
    )
    assert definition.keywords == ["hat", "cap"]
    assert definition.seasonal_fit == ["all-season"]

    with pytest.raises(ValidationError):
        CategoryDefinition(
            key="hat",
            display_name="Hat",
            description="Headwear",
            keywords=[],
            price_range={"min": 1, "max": 2},
        )

    with pytest.raises(ValidationError):
        CategoryDefinition(
            key="hat",
            display_name="Hat",
            description="Headwear",
            keywords=["hat", "HAT"],
            price_range={"min": 1, "max": 2},
        )


def test_enum_values():
    """Test enum values."""
    assert ReviewMode.ALL.value == "all"
    assert ReviewMode.REVIEW_ONLY.value == "review_only"
    assert SizeBucket.XL.value == "XL"
