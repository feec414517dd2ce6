"""Build product database updates from categorization records."""

import json
from pathlib import Path

from rich.console import Console

from ..models.outputs import ProductUpdate
from ..models.record import PersistedMapping

console = Console()


def build_product_updates(mapping: PersistedMapping) -> list[ProductUpdate]:
    """Convert the mapping into updates keyed by image filename.

    Legacy entries only carry their category.
    """
    updates = []
    for filename, record in mapping.items():
        if record.legacy:
            updates.append(ProductUpdate(image=filename, category=record.category))
            continue

        updates.append(
            ProductUpdate(
                image=filename,
                category=record.category,
                tags=record.all_tags,
                seasonal_fit=record.seasonal_fit,
                color_category=record.color_category,
                confidence=record.confidence,
                category_data=record.to_entry(),
            )
        )
    return updates


def write_product_updates(updates: list[ProductUpdate], output_file: Path) -> Path:
    """Write updates as a JSON array for the database loader."""
    output_file.parent.mkdir(parents=True, exist_ok=True)
    data = [u.model_dump(mode="json", by_alias=True, exclude_none=True) for u in updates]

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")

    console.print(f"[green]Wrote {len(updates)} product updates to {output_file}[/green]")
    return output_file
