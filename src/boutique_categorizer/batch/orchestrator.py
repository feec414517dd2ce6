"""Orchestrate batch categorization and the manual review workflow."""

import json
from datetime import datetime, timezone
from typing import Iterable, Optional

from rich.console import Console
from rich.progress import Progress

from ..categorization.classifier import Classifier
from ..errors import CorruptMappingError
from ..models.category import CategorySummary, PriceRange
from ..models.outputs import (
    BatchResult,
    CategorizationReport,
    ReviewMode,
    ReviewResult,
    StatisticsSnapshot,
)
from ..models.record import CategorizationRecord, PersistedMapping
from ..outputs import statistics
from ..review.prompter import Reviewer
from ..storage.store import MappingStore

console = Console()

MANUAL_CONFIDENCE = 100.0


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _mark_reviewed(record: CategorizationRecord) -> CategorizationRecord:
    """Apply human acceptance to a record."""
    return record.model_copy(
        update={
            "confidence": MANUAL_CONFIDENCE,
            "needs_review": None,
            "auto_generated": None,
            "timestamp": None,
            "manually_reviewed": True,
            "reviewed_at": _now(),
            "legacy": False,
        }
    )


def selects_for_review(mode: ReviewMode, record: Optional[CategorizationRecord]) -> bool:
    """Whether the review loop should visit an image with this record.

    ``ALL`` visits uncategorized and flagged images; ``REVIEW_ONLY`` visits
    flagged images only.
    """
    if mode == ReviewMode.REVIEW_ONLY:
        return record is not None and record.flagged_for_review
    return record is None or record.flagged_for_review


class BatchCategorizer:
    """Run the classifier over image filenames and maintain the mapping."""

    def __init__(self, classifier: Classifier, store: Optional[MappingStore] = None):
        """Initialize batch categorizer.

        Args:
            classifier: Classifier for individual filenames
            store: Persistence for the mapping and statistics; nothing is
                written when omitted
        """
        self.classifier = classifier
        self.registry = classifier.registry
        self.store = store

    def propose(self, filename: str) -> CategorizationRecord:
        """Classify one filename using the hints extracted from it."""
        metadata = self.classifier.extract_metadata(filename)
        return self.classifier.categorize(filename, metadata)

    def auto_categorize(
        self,
        items: Iterable[str],
        threshold: float,
        existing: PersistedMapping,
        force: bool = False,
    ) -> BatchResult:
        """Automatically categorize images not yet categorized.

        Args:
            items: Image filenames in processing order
            threshold: Minimum confidence for accepting without review
            existing: Current persisted mapping
            force: Passed to the store when saving

        Returns:
            Counters and the updated mapping
        """
        console.print("\n[bold cyan]Automatic Image Categorization[/bold cyan]\n")

        items = list(items)
        mapping = dict(existing)
        result = BatchResult()

        with Progress(console=console) as progress:
            task = progress.add_task("[cyan]Categorizing images...", total=len(items))

            for filename in items:
                progress.update(task, advance=1)

                current = mapping.get(filename)
                if current is not None and not current.legacy:
                    result.skipped += 1
                    continue

                proposal = self.propose(filename)
                update = {"auto_generated": True, "timestamp": _now()}

                if proposal.confidence >= threshold:
                    result.processed += 1
                    update["needs_review"] = None
                    progress.console.print(
                        f"[green]{filename} → {proposal.display_name} ({proposal.confidence:.1f}%)[/green]"
                    )
                else:
                    result.low_confidence += 1
                    update["needs_review"] = True
                    progress.console.print(
                        f"[yellow]{filename} → low confidence ({proposal.confidence:.1f}%), "
                        "needs manual review[/yellow]"
                    )

                mapping[filename] = proposal.model_copy(update=update)

        self._persist(mapping, force)

        console.print("\n[cyan]Auto-categorization summary:[/cyan]")
        console.print(f"  Categorized: {result.processed}")
        console.print(f"  Low confidence (needs review): {result.low_confidence}")
        console.print(f"  Already categorized: {result.skipped}")

        result.mapping = mapping
        return result

    def manual_review(
        self,
        items: Iterable[str],
        mode: ReviewMode,
        existing: PersistedMapping,
        reviewer: Reviewer,
        force: bool = False,
    ) -> ReviewResult:
        """Walk images with a human reviewer choosing categories.

        Quitting, or the reviewer running out of input, keeps every
        decision made so far; the mapping is saved either way. The item in
        progress when input ends is left as it was.

        Args:
            items: Image filenames in processing order
            mode: Which images to visit
            existing: Current persisted mapping
            reviewer: Source of one answer per prompt
            force: Passed to the store when saving

        Returns:
            Counters and the updated mapping

        Raises:
            CorruptMappingError: If the mapping file failed to load and force
                is unset, before any prompt is shown
        """
        if self.store is not None and self.store.load_error and not force:
            raise CorruptMappingError(self.store.mapping_file, self.store.load_error)

        mapping = dict(existing)
        result = ReviewResult()
        categories = self.registry.list_categories()

        reviewer.show(self.format_menu(categories))

        selected = [f for f in items if selects_for_review(mode, mapping.get(f))]
        for filename in selected:
            try:
                outcome = self._review_item(filename, mapping, categories, reviewer)
            except EOFError:
                outcome = "quit"
            if outcome == "quit":
                result.quit_early = True
                break
            if outcome == "reviewed":
                result.reviewed += 1
            elif outcome == "invalid":
                result.invalid += 1
            else:
                result.skipped += 1

        self._persist(mapping, force)

        result.mapping = mapping
        return result

    def compute_statistics(self, mapping: PersistedMapping) -> StatisticsSnapshot:
        return statistics.compute_statistics(mapping)

    def generate_report(self, mapping: PersistedMapping) -> CategorizationReport:
        return statistics.generate_report(mapping)

    @staticmethod
    def format_menu(categories: list[CategorySummary]) -> str:
        """Numbered category menu plus control options."""
        lines = ["Available categories:"]
        for index, cat in enumerate(categories, 1):
            lines.append(f"{index}. {cat.display_name} ({cat.key})")
        lines.extend([
            "0. Skip this image",
            "r. Auto-suggest and review",
            "s. Show image stats",
            "q. Quit and save",
        ])
        return "\n".join(lines)

    def _persist(self, mapping: PersistedMapping, force: bool) -> None:
        if self.store is None:
            return
        self.store.save(mapping, force=force)
        self.store.save_statistics(self.compute_statistics(mapping))

    def _review_item(
        self,
        filename: str,
        mapping: PersistedMapping,
        categories: list[CategorySummary],
        reviewer: Reviewer,
    ) -> str:
        """Prompt for one image and record the decision.

        Returns:
            One of "reviewed", "skipped", "invalid" or "quit"
        """
        reviewer.show(f"\nProcessing: {filename}")
        current = mapping.get(filename)
        if current is not None:
            confidence = f"{current.confidence:.1f}%" if current.confidence is not None else "N/A"
            reviewer.show(f"  Current: {current.display_name or current.category} (Confidence: {confidence})")
            if current.tags:
                reviewer.show(f"  Tags: {', '.join(current.tags)}")

        while True:
            answer = reviewer.ask("Enter choice:").strip().lower()

            if answer == "q":
                return "quit"
            if answer == "0":
                reviewer.show("Skipped")
                return "skipped"
            if answer == "r":
                return "reviewed" if self._offer_suggestion(filename, mapping, reviewer) else "skipped"
            if answer == "s":
                self._show_item_stats(filename, mapping, reviewer)
                continue

            try:
                index = int(answer) - 1
            except ValueError:
                index = -1

            if 0 <= index < len(categories):
                mapping[filename] = self._categorize_manually(categories[index], reviewer)
                reviewer.show(f"Categorized as: {categories[index].display_name}")
                return "reviewed"

            reviewer.show("Invalid choice, skipping")
            return "invalid"

    def _offer_suggestion(
        self,
        filename: str,
        mapping: PersistedMapping,
        reviewer: Reviewer,
    ) -> bool:
        suggestion = self.propose(filename)

        reviewer.show(f"\nAuto-suggestion for {filename}:")
        reviewer.show(f"  Category: {suggestion.display_name}")
        reviewer.show(f"  Confidence: {suggestion.confidence:.1f}%")
        reviewer.show(f"  Tags: {', '.join(suggestion.tags or [])}")
        reviewer.show(f"  Seasonal Fit: {', '.join(suggestion.seasonal_fit or [])}")
        reviewer.show(f"  Color Category: {', '.join(suggestion.color_category or [])}")

        if reviewer.ask("Accept this suggestion? (y/n):").strip().lower() != "y":
            return False

        mapping[filename] = _mark_reviewed(suggestion)
        reviewer.show("Auto-suggestion accepted")
        return True

    def _categorize_manually(self, summary: CategorySummary, reviewer: Reviewer) -> CategorizationRecord:
        definition = self.registry.get(summary.key)
        record = CategorizationRecord(
            category=definition.key,
            display_name=definition.display_name,
            description=definition.description,
            tags=list(definition.tags),
            seasonal_fit=list(definition.seasonal_fit),
            color_category=list(definition.color_category),
            suggested_keywords=list(definition.keywords),
            suggested_price_range=definition.price_range,
        )

        price_range = definition.price_range
        price_input = reviewer.ask(f"Price range (default: {price_range.min}-{price_range.max}):")
        record.custom_price_range = self._parse_price_range(price_input, reviewer)

        tags_input = reviewer.ask("Additional tags (comma-separated):")
        additional = [t.strip() for t in tags_input.split(",") if t.strip()]
        record.additional_tags = additional or None

        return _mark_reviewed(record)

    @staticmethod
    def _parse_price_range(text: str, reviewer: Reviewer) -> Optional[PriceRange]:
        """Parse "min-max"; blank or unusable input keeps the category default."""
        if not text.strip():
            return None

        parts = [p.strip() for p in text.split("-")]
        try:
            low, high = (int(p) for p in parts)
            return PriceRange(min=low, max=high)
        except ValueError:
            reviewer.show(f"Ignoring price range '{text.strip()}', expected min-max")
            return None

    def _show_item_stats(
        self,
        filename: str,
        mapping: PersistedMapping,
        reviewer: Reviewer,
    ) -> None:
        metadata = self.classifier.extract_metadata(filename)
        reviewer.show(f"\nStats for {filename}:")
        reviewer.show(
            "  Extracted metadata: "
            + json.dumps(metadata.model_dump(mode="json", exclude_none=True), indent=2)
        )

        current = mapping.get(filename)
        if current is not None:
            reviewer.show("  Current categorization: " + json.dumps(current.to_entry(), indent=2))
            related = self.registry.related_categories(current.category)
            reviewer.show(f"  Related categories: {', '.join(related)}")
