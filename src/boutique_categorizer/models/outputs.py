"""Models for statistics, reports and batch results."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .record import PersistedMapping


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfidenceStat(_CamelModel):
    """Running confidence totals for one category."""

    total: float = 0
    count: int = 0
    avg: float = 0


class StatisticsSnapshot(_CamelModel):
    """Aggregate statistics recomputed over the whole mapping."""

    total_images: int = 0
    category_counts: dict[str, int] = Field(default_factory=dict)
    confidence_stats: dict[str, ConfidenceStat] = Field(default_factory=dict)
    seasonal_distribution: dict[str, int] = Field(default_factory=dict)
    color_distribution: dict[str, int] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=_utcnow)


class ReportSummary(_CamelModel):
    """Provenance and review counters."""

    total_images: int = 0
    auto_generated: int = 0
    manually_reviewed: int = 0
    needs_review: int = 0


class CategoryReportEntry(_CamelModel):
    """Per-category count and average confidence."""

    count: int = 0
    avg_confidence: float = 0


class ConfidenceDistribution(_CamelModel):
    """Histogram of confidences: low < 50 <= medium < 80 <= high."""

    low: int = 0
    medium: int = 0
    high: int = 0


class CategorizationReport(_CamelModel):
    """Report written to categorization-report.json."""

    summary: ReportSummary = Field(default_factory=ReportSummary)
    categories: dict[str, CategoryReportEntry] = Field(default_factory=dict)
    confidence_distribution: ConfidenceDistribution = Field(default_factory=ConfidenceDistribution)
    generated_at: datetime = Field(default_factory=_utcnow)


class ReviewMode(str, Enum):
    """Which images the manual review loop visits."""

    ALL = "all"
    REVIEW_ONLY = "review_only"


class BatchResult(BaseModel):
    """Outcome of an automatic categorization pass."""

    processed: int = 0
    low_confidence: int = 0
    skipped: int = 0
    mapping: PersistedMapping = Field(default_factory=dict)


class ReviewResult(BaseModel):
    """Outcome of a manual review session."""

    reviewed: int = 0
    skipped: int = 0
    invalid: int = 0
    quit_early: bool = False
    mapping: PersistedMapping = Field(default_factory=dict)


class ProductUpdate(_CamelModel):
    """Update handed to the product database, matched on image filename."""

    image: str
    category: str
    tags: Optional[list[str]] = None
    seasonal_fit: Optional[list[str]] = None
    color_category: Optional[list[str]] = None
    confidence: Optional[float] = None
    category_data: Optional[dict[str, Any]] = None
    updated_at: datetime = Field(default_factory=_utcnow)
