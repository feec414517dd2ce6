"""Command-line interface for boutique image categorization."""

import random
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .batch.orchestrator import BatchCategorizer
from .catalog.registry import CategoryRegistry
from .categorization.classifier import Classifier
from .config import Settings, get_settings
from .errors import CorruptMappingError
from .export.product_updates import build_product_updates, write_product_updates
from .models.outputs import ReviewMode
from .outputs.generator import OutputGenerator
from .review.prompter import ConsoleReviewer
from .storage.store import MappingStore, list_image_files

console = Console()


def load_registry(settings: Settings) -> CategoryRegistry:
    if settings.categories_config:
        return CategoryRegistry.from_yaml(settings.categories_config)
    return CategoryRegistry.default()


def build_categorizer(settings: Settings) -> BatchCategorizer:
    """Wire registry, classifier and store from settings."""
    classifier = Classifier(load_registry(settings))
    return BatchCategorizer(classifier, store=MappingStore.from_settings(settings))


@click.group()
@click.option(
    "--data-dir",
    help="Directory for mapping, statistics and reports (overrides config)",
    type=click.Path(path_type=Path),
)
@click.option(
    "--images-dir",
    help="Directory holding product images (overrides config)",
    type=click.Path(path_type=Path),
)
@click.option(
    "--categories",
    "categories_config",
    help="YAML file with category definitions (overrides config)",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
)
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Optional[Path],
    images_dir: Optional[Path],
    categories_config: Optional[Path],
) -> None:
    """Boutique Image Categorization System."""
    settings = get_settings()

    if data_dir:
        settings.data_dir = data_dir
    if images_dir:
        settings.images_dir = images_dir
    if categories_config:
        settings.categories_config = categories_config

    ctx.obj = settings


@cli.command()
@click.option(
    "--threshold",
    help="Minimum confidence for accepting without review (default from config)",
    type=click.FloatRange(0, 100),
)
@click.option(
    "--force",
    help="Overwrite a mapping file that failed to parse",
    is_flag=True,
)
@click.pass_obj
def auto(settings: Settings, threshold: Optional[float], force: bool) -> None:
    """Automatically categorize all images."""
    if threshold is None:
        threshold = settings.confidence_threshold

    settings.ensure_directories()

    console.print("[bold cyan]Boutique Image Categorization[/bold cyan]\n")
    console.print(f"Images directory: {settings.images_dir.absolute()}")
    console.print(f"Mapping file: {settings.mapping_file.absolute()}")
    console.print(f"Confidence threshold: {threshold}")
    console.print()

    try:
        categorizer = build_categorizer(settings)
        existing = categorizer.store.load()
        files = list_image_files(settings.images_dir)

        result = categorizer.auto_categorize(files, threshold, existing, force=force)

        if result.low_confidence:
            console.print("\n[cyan]Next steps:[/cyan]")
            console.print("Run `boutique-categorizer review --needs-review-only` for low-confidence items")

    except CorruptMappingError as e:
        console.print(f"\n[red]{e}[/red]")
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Categorization interrupted by user[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Error during categorization: {e}[/red]")
        raise


@cli.command()
@click.option(
    "--needs-review-only",
    help="Only visit images flagged for review",
    is_flag=True,
)
@click.option(
    "--force",
    help="Overwrite a mapping file that failed to parse",
    is_flag=True,
)
@click.pass_obj
def review(settings: Settings, needs_review_only: bool, force: bool) -> None:
    """Manually categorize images or review low-confidence items."""
    mode = ReviewMode.REVIEW_ONLY if needs_review_only else ReviewMode.ALL

    console.print("[bold cyan]Manual Image Categorization[/bold cyan]\n")

    try:
        categorizer = build_categorizer(settings)
        existing = categorizer.store.load()
        files = list_image_files(settings.images_dir)

        result = categorizer.manual_review(
            files,
            mode,
            existing,
            ConsoleReviewer(console),
            force=force,
        )

        console.print("\n[cyan]Review summary:[/cyan]")
        console.print(f"  Reviewed: {result.reviewed}")
        console.print(f"  Skipped: {result.skipped}")
        console.print(f"  Invalid choices: {result.invalid}")
        if result.quit_early:
            console.print("[yellow]Stopped early, decisions so far were saved[/yellow]")

    except CorruptMappingError as e:
        console.print(f"\n[red]{e}[/red]")
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Review interrupted by user, unsaved decisions discarded[/yellow]")
    except Exception as e:
        console.print(f"\n[red]Error during review: {e}[/red]")
        raise


@cli.command()
@click.pass_obj
def report(settings: Settings) -> None:
    """Generate the categorization report."""
    store = MappingStore.from_settings(settings)
    if not store.mapping_file.exists():
        console.print("[red]No categories file found. Run categorization first.[/red]")
        raise SystemExit(1)

    mapping = store.load()
    if store.load_error:
        raise SystemExit(1)

    generator = OutputGenerator(settings.data_dir, settings.report_filename)
    result = generator.generate_all(mapping, load_registry(settings))

    console.print("\n[bold cyan]Categorization Report[/bold cyan]")
    console.print(f"  Total images: {result.summary.total_images}")
    console.print(f"  Auto-generated: {result.summary.auto_generated}")
    console.print(f"  Manually reviewed: {result.summary.manually_reviewed}")
    console.print(f"  Needs review: {result.summary.needs_review}")


@cli.command()
@click.pass_obj
def stats(settings: Settings) -> None:
    """Show the current statistics snapshot."""
    snapshot = MappingStore.from_settings(settings).load_statistics()
    if snapshot is None:
        console.print("[yellow]No statistics available yet[/yellow]")
        return

    console.print("[cyan]Current statistics:[/cyan]")
    console.print_json(data=snapshot.model_dump(mode="json", by_alias=True))


@cli.command()
@click.pass_obj
def categories(settings: Settings) -> None:
    """List available categories in menu order."""
    registry = load_registry(settings)

    table = Table(title="Available categories")
    table.add_column("#", justify="right")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Price range")
    table.add_column("Tags")

    for index, cat in enumerate(registry.list_categories(), 1):
        table.add_row(
            str(index),
            cat.key,
            cat.display_name,
            f"{cat.price_range.min}-{cat.price_range.max}",
            ", ".join(cat.tags),
        )

    console.print(table)


@cli.command()
@click.argument("filename")
@click.option("--name", help="Product name searched alongside the filename", type=str)
@click.pass_obj
def classify(settings: Settings, filename: str, name: Optional[str]) -> None:
    """Show the categorization proposed for FILENAME without saving it."""
    classifier = Classifier(load_registry(settings))

    metadata = classifier.extract_metadata(filename)
    if name:
        metadata.name = name
    record = classifier.categorize(filename, metadata)

    console.print(f"[cyan]Metadata for {filename}:[/cyan]")
    console.print_json(data=metadata.model_dump(mode="json", exclude_none=True))
    console.print("[cyan]Proposed categorization:[/cyan]")
    console.print_json(data=record.to_entry())

    related = classifier.registry.related_categories(record.category)
    if related:
        console.print(f"Related categories: {', '.join(related)}")


@cli.command()
@click.argument("category")
@click.option("--count", help="Number of suggestions", type=click.IntRange(1, 5), default=5)
@click.option("--seed", help="Random seed for prices", type=int)
@click.pass_obj
def suggest(settings: Settings, category: str, count: int, seed: Optional[int]) -> None:
    """Suggest placeholder products for CATEGORY."""
    registry = load_registry(settings)
    suggestions = registry.generate_product_suggestions(category, count, rng=random.Random(seed))

    if not suggestions:
        console.print(f"[red]Unknown category: {category}[/red]")
        raise SystemExit(1)

    for s in suggestions:
        console.print(f"  {s.name} - {s.estimated_price} ({', '.join(s.tags)})")


@cli.command("export-updates")
@click.option(
    "--output",
    help="Output JSON file for the product database loader",
    type=click.Path(path_type=Path),
    default="product-updates.json",
)
@click.pass_obj
def export_updates(settings: Settings, output: Path) -> None:
    """Export categorizations as product database updates."""
    store = MappingStore.from_settings(settings)
    if not store.mapping_file.exists():
        console.print("[red]No categories file found. Run categorization first.[/red]")
        raise SystemExit(1)

    mapping = store.load()
    if store.load_error:
        raise SystemExit(1)

    write_product_updates(build_product_updates(mapping), output)


@cli.command()
@click.pass_obj
def validate(settings: Settings) -> None:
    """Validate configuration and data files."""
    try:
        console.print("[cyan]Validating configuration...[/cyan]\n")

        registry = load_registry(settings)
        source = settings.categories_config or "packaged defaults"
        console.print(f"  ✓ Loaded {len(registry)} categories from {source}")
        console.print(f"  ✓ Fallback category: {registry.fallback.key}")

        if settings.images_dir.is_dir():
            console.print(f"  ✓ Images directory: {settings.images_dir.absolute()}")
        else:
            console.print(f"  [yellow]! Images directory missing: {settings.images_dir.absolute()}[/yellow]")

        store = MappingStore.from_settings(settings)
        mapping = store.load()
        if store.load_error:
            raise CorruptMappingError(store.mapping_file, store.load_error)
        console.print(f"  ✓ Mapping file readable ({len(mapping)} entries)")

        console.print("\n[green]All validations passed![/green]")

    except Exception as e:
        console.print(f"\n[red]Validation failed: {e}[/red]")
        raise


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
