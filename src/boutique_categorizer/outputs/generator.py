"""Generate categorization report artifacts."""

import json
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..catalog.registry import CategoryRegistry
from ..models.outputs import CategorizationReport
from ..models.record import PersistedMapping
from .statistics import generate_report

console = Console()


class OutputGenerator:
    """Write the JSON report and its Markdown summary."""

    def __init__(self, output_dir: Path, report_filename: str = "categorization-report.json"):
        """Initialize output generator.

        Args:
            output_dir: Directory for output files
            report_filename: Name of the JSON report; the Markdown summary
                shares its stem
        """
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.report_file = output_dir / report_filename
        self.summary_file = self.report_file.with_suffix(".md")

    def generate_all(
        self,
        mapping: PersistedMapping,
        registry: Optional[CategoryRegistry] = None,
    ) -> CategorizationReport:
        """Generate all report outputs.

        Args:
            mapping: Persisted mapping to report on
            registry: Used for display names in the summary

        Returns:
            The report that was written
        """
        console.print("\n[cyan]Generating categorization report...[/cyan]")

        report = generate_report(mapping)
        self.generate_report_json(report)
        self.generate_summary(report, registry)

        console.print(f"[cyan]Output directory: {self.output_dir.absolute()}[/cyan]")
        return report

    def generate_report_json(self, report: CategorizationReport) -> Path:
        with open(self.report_file, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(mode="json", by_alias=True), f, indent=2)
            f.write("\n")

        console.print(f"  ✓ Generated {self.report_file.name}")
        return self.report_file

    def generate_summary(
        self,
        report: CategorizationReport,
        registry: Optional[CategoryRegistry] = None,
    ) -> Path:
        """Generate the Markdown summary of a report.

        Args:
            report: Report to summarize
            registry: Used for display names; keys are shown alone when omitted
        """
        summary = report.summary
        total = summary.total_images
        bands = report.confidence_distribution

        lines = [
            "# Categorization Report\n",
            f"Generated: {report.generated_at.isoformat()}\n",
            "## Summary\n",
            f"- Total images: {total}",
            f"- Auto-generated: {summary.auto_generated}",
            f"- Manually reviewed: {summary.manually_reviewed}",
            f"- Needs review: {summary.needs_review}\n",
            "## Confidence Distribution\n",
            f"- **High** (80+): {bands.high}",
            f"- **Medium** (50-79): {bands.medium}",
            f"- **Low** (<50): {bands.low}\n",
            "## Categories\n",
            "| Category | Images | Share | Avg confidence |",
            "| --- | --- | --- | --- |",
        ]

        for key, entry in sorted(report.categories.items(), key=lambda x: x[1].count, reverse=True):
            definition = registry.get(key) if registry else None
            label = f"{definition.display_name} (`{key}`)" if definition else f"`{key}`"
            percentage = (entry.count / total * 100) if total else 0
            lines.append(f"| {label} | {entry.count} | {percentage:.1f}% | {entry.avg_confidence:.1f} |")

        if summary.needs_review:
            lines.extend([
                "\n## Next Steps\n",
                f"{summary.needs_review} images are flagged for review. "
                "Run `boutique-categorizer review --needs-review-only` to resolve them.\n",
            ])

        with open(self.summary_file, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

        console.print(f"  ✓ Generated {self.summary_file.name}")
        return self.summary_file
