"""Data models for boutique image categorization."""

from .category import (
    CategoryDefinition,
    CategorySummary,
    FallbackDefinition,
    PriceRange,
    ProductSuggestion,
)
from .outputs import (
    BatchResult,
    CategorizationReport,
    CategoryReportEntry,
    ConfidenceDistribution,
    ConfidenceStat,
    ProductUpdate,
    ReportSummary,
    ReviewMode,
    ReviewResult,
    StatisticsSnapshot,
)
from .record import (
    CategorizationRecord,
    PersistedMapping,
    ProductMetadata,
    SizeBucket,
    mapping_from_json,
    mapping_to_json,
)

__all__ = [
    "CategoryDefinition",
    "CategorySummary",
    "FallbackDefinition",
    "PriceRange",
    "ProductSuggestion",
    "BatchResult",
    "CategorizationReport",
    "CategoryReportEntry",
    "ConfidenceDistribution",
    "ConfidenceStat",
    "ProductUpdate",
    "ReportSummary",
    "ReviewMode",
    "ReviewResult",
    "StatisticsSnapshot",
    "CategorizationRecord",
    "PersistedMapping",
    "ProductMetadata",
    "SizeBucket",
    "mapping_from_json",
    "mapping_to_json",
]
