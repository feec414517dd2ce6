"""Category definitions table and lookups."""

import random
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from ..errors import RegistryError
from ..models.category import (
    CategoryDefinition,
    CategorySummary,
    FallbackDefinition,
    ProductSuggestion,
)

SUGGESTION_TEMPLATES = [
    "Premium {category}",
    "Designer {category}",
    "Elegant {category}",
    "Traditional {category}",
    "Contemporary {category}",
]


class CategoryRegistry:
    """In-memory table of product categories.

    Definition order is significant: it numbers the review menu and breaks
    ties between equally scored categories.
    """

    def __init__(
        self,
        categories: list[CategoryDefinition],
        fallback: Optional[FallbackDefinition] = None,
        related: Optional[dict[str, list[str]]] = None,
        colors: Optional[list[str]] = None,
    ):
        """Initialize registry.

        Args:
            categories: Category definitions in menu order
            fallback: Template for the no-match record
            related: Hand-authored adjacency table of category keys
            colors: Color vocabulary for filename color extraction

        Raises:
            RegistryError: If keys repeat or a reference names an unknown key
        """
        self.categories: dict[str, CategoryDefinition] = {}
        for definition in categories:
            if definition.key in self.categories:
                raise RegistryError(f"Duplicate category key: {definition.key}")
            self.categories[definition.key] = definition

        if not self.categories:
            raise RegistryError("At least one category must be defined")

        self.fallback = fallback or FallbackDefinition()
        if self.fallback.key not in self.categories:
            raise RegistryError(f"Fallback category '{self.fallback.key}' is not defined")

        self.related: dict[str, list[str]] = related or {}
        for key, neighbours in self.related.items():
            unknown = [k for k in [key, *neighbours] if k not in self.categories]
            if unknown:
                raise RegistryError(f"Related table for '{key}' names unknown categories: {unknown}")

        self.colors = [c.lower() for c in (colors or [])]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryRegistry":
        """Build a registry from a decoded configuration document.

        Raises:
            RegistryError: If the document is malformed
        """
        if not isinstance(data, dict) or "categories" not in data:
            raise RegistryError("Category configuration needs a 'categories' list")

        try:
            categories = [CategoryDefinition.model_validate(c) for c in data["categories"]]
            fallback = (
                FallbackDefinition.model_validate(data["fallback"])
                if data.get("fallback")
                else None
            )
        except ValidationError as e:
            raise RegistryError(f"Invalid category definition: {e}") from e

        return cls(
            categories=categories,
            fallback=fallback,
            related=data.get("related") or {},
            colors=data.get("colors") or [],
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "CategoryRegistry":
        """Load a registry from a YAML file."""
        with open(path) as f:
            return cls.from_dict(yaml.safe_load(f))

    @classmethod
    def default(cls) -> "CategoryRegistry":
        """Load the packaged boutique categories."""
        text = resources.files("boutique_categorizer").joinpath("categories.yaml").read_text()
        return cls.from_dict(yaml.safe_load(text))

    def __iter__(self):
        return iter(self.categories.values())

    def __len__(self) -> int:
        return len(self.categories)

    def list_categories(self) -> list[CategorySummary]:
        """Get all categories in definition order.

        Returns:
            Category summaries, suitable for a numbered menu
        """
        return [
            CategorySummary(
                key=d.key,
                display_name=d.display_name,
                description=d.description,
                tags=d.tags,
                price_range=d.price_range,
            )
            for d in self.categories.values()
        ]

    def get(self, key: str) -> Optional[CategoryDefinition]:
        return self.categories.get(key)

    def related_categories(self, key: str) -> list[str]:
        """Get categories that pair well with the given one."""
        return list(self.related.get(key, []))

    def extract_colors(self, text: str) -> list[str]:
        """Find vocabulary colors occurring anywhere in the text.

        Args:
            text: Text to scan, e.g. a filename

        Returns:
            Matching colors in vocabulary order
        """
        lowered = text.lower()
        return [color for color in self.colors if color in lowered]

    def generate_product_suggestions(
        self,
        key: str,
        count: int = 5,
        rng: Optional[random.Random] = None,
    ) -> list[ProductSuggestion]:
        """Generate placeholder products for a category.

        Args:
            key: Category key
            count: Number of suggestions (at most one per name template)
            rng: Random source for prices

        Returns:
            Suggestions priced inside the category's range, empty for unknown keys
        """
        definition = self.get(key)
        if definition is None:
            return []

        rng = rng or random.Random()
        return [
            ProductSuggestion(
                name=template.format(category=definition.display_name),
                category=key,
                estimated_price=rng.randint(definition.price_range.min, definition.price_range.max),
                tags=definition.tags,
            )
            for template in SUGGESTION_TEMPLATES[: max(0, count)]
        ]
