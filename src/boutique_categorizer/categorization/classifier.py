"""Keyword-based product categorization with confidence scoring."""

import re
from typing import Optional

from ..catalog.registry import CategoryRegistry
from ..models.category import CategoryDefinition
from ..models.record import CategorizationRecord, ProductMetadata, SizeBucket

FALLBACK_CONFIDENCE = 10.0
STRONG_MATCH_BONUS = 20
HIGH_CONFIDENCE_CUTOFF = 80
HIGH_CONFIDENCE_BONUS = 10

PRICE_PATTERN = re.compile(r"(\d+)(k?)_?(?:price|cost|rs)")
TIER_PATTERN = re.compile(r"(designer|premium|luxury|budget|economy)")

# Checked in order, first hit wins
SIZE_CUES = [
    (SizeBucket.XL, ("xl", "large")),
    (SizeBucket.S, ("small", "sm")),
    (SizeBucket.M, ("medium", "med")),
]


class Classifier:
    """Assign a category and confidence to an image filename."""

    def __init__(self, registry: CategoryRegistry):
        """Initialize classifier.

        Args:
            registry: Category definitions to match against
        """
        self.registry = registry

    def score(self, definition: CategoryDefinition, search_text: str) -> float:
        """Raw confidence of one category for lowercase search text.

        Returns 0 when none of the category's keywords occur in the text.
        """
        matched = 0
        strong_matches = 0
        for kw in definition.keywords:
            if kw in search_text:
                matched += 1
                if definition.key in kw:
                    strong_matches += 1

        if matched == 0:
            return 0.0

        return min(
            100.0,
            matched / len(definition.keywords) * 100 + strong_matches * STRONG_MATCH_BONUS,
        )

    def categorize(
        self,
        key: str,
        metadata: Optional[ProductMetadata] = None,
    ) -> CategorizationRecord:
        """Categorize a product from its filename and optional metadata.

        Only the filename and ``metadata.name`` are searched for keywords.

        Args:
            key: Image filename
            metadata: Extracted hints

        Returns:
            Transient record for the best category, or the fallback record
            flagged for review when nothing matched
        """
        name = metadata.name if metadata and metadata.name else ""
        search_text = f"{key} {name}".lower()

        best: Optional[CategoryDefinition] = None
        best_score = 0.0
        for definition in self.registry:
            confidence = self.score(definition, search_text)
            if confidence > best_score:
                best_score = confidence
                best = definition

        if best is None:
            return self._fallback_record()

        if best_score > HIGH_CONFIDENCE_CUTOFF:
            best_score = min(100.0, best_score + HIGH_CONFIDENCE_BONUS)

        return CategorizationRecord(
            category=best.key,
            display_name=best.display_name,
            description=best.description,
            confidence=best_score,
            tags=list(best.tags),
            seasonal_fit=list(best.seasonal_fit),
            color_category=list(best.color_category),
            suggested_keywords=list(best.keywords),
            suggested_price_range=best.price_range,
        )

    def _fallback_record(self) -> CategorizationRecord:
        fallback = self.registry.fallback
        return CategorizationRecord(
            category=fallback.key,
            display_name=fallback.display_name,
            description=fallback.description,
            confidence=FALLBACK_CONFIDENCE,
            tags=list(fallback.tags),
            seasonal_fit=list(fallback.seasonal_fit),
            color_category=list(fallback.color_category),
            suggested_keywords=list(fallback.suggested_keywords),
            needs_review=True,
        )

    def extract_metadata(self, filename: str) -> ProductMetadata:
        """Derive display hints from filename patterns.

        Args:
            filename: Image filename

        Returns:
            Colors, estimated price, size bucket and tier where present
        """
        name = filename.lower()
        metadata = ProductMetadata(colors=self.registry.extract_colors(name))

        price_match = PRICE_PATTERN.search(name)
        if price_match:
            multiplier = 1000 if price_match.group(2) else 1
            metadata.estimated_price = int(price_match.group(1)) * multiplier

        for size, cues in SIZE_CUES:
            if any(cue in name for cue in cues):
                metadata.size = size
                break

        tier_match = TIER_PATTERN.search(name)
        if tier_match:
            metadata.tier = tier_match.group(1)

        return metadata
