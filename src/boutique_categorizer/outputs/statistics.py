"""Aggregate statistics and reports over a persisted mapping."""

from ..models.outputs import (
    CategorizationReport,
    CategoryReportEntry,
    ConfidenceStat,
    StatisticsSnapshot,
)
from ..models.record import PersistedMapping

LOW_CONFIDENCE_LIMIT = 50
HIGH_CONFIDENCE_LIMIT = 80


def compute_statistics(mapping: PersistedMapping) -> StatisticsSnapshot:
    """Recompute statistics over every record in the mapping.

    Legacy entries only contribute to ``category_counts``.
    """
    stats = StatisticsSnapshot(total_images=len(mapping))

    for record in mapping.values():
        category = record.category
        stats.category_counts[category] = stats.category_counts.get(category, 0) + 1

        if record.legacy:
            continue

        conf = stats.confidence_stats.setdefault(category, ConfidenceStat())
        conf.total += record.confidence or 0
        conf.count += 1
        conf.avg = conf.total / conf.count

        for season in record.seasonal_fit or []:
            stats.seasonal_distribution[season] = stats.seasonal_distribution.get(season, 0) + 1

        for color in record.color_category or []:
            stats.color_distribution[color] = stats.color_distribution.get(color, 0) + 1

    return stats


def generate_report(mapping: PersistedMapping) -> CategorizationReport:
    """Summarize provenance, review state and confidence bands.

    Legacy entries are counted per category but are left out of the
    provenance counters and the confidence histogram. The per-category
    average divides by the full count, legacy entries included.
    """
    report = CategorizationReport()
    report.summary.total_images = len(mapping)
    totals: dict[str, float] = {}

    for record in mapping.values():
        entry = report.categories.setdefault(record.category, CategoryReportEntry())
        entry.count += 1
        totals.setdefault(record.category, 0.0)

        if record.legacy:
            continue

        if record.auto_generated:
            report.summary.auto_generated += 1
        if record.manually_reviewed:
            report.summary.manually_reviewed += 1
        if record.needs_review:
            report.summary.needs_review += 1

        confidence = record.confidence or 0
        totals[record.category] += confidence

        if confidence < LOW_CONFIDENCE_LIMIT:
            report.confidence_distribution.low += 1
        elif confidence < HIGH_CONFIDENCE_LIMIT:
            report.confidence_distribution.medium += 1
        else:
            report.confidence_distribution.high += 1

    for category, entry in report.categories.items():
        entry.avg_confidence = totals[category] / entry.count

    return report
