"""Load and save the filename -> categorization mapping."""

import json
import re
import shutil
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError
from rich.console import Console

from ..errors import CorruptMappingError
from ..models.outputs import StatisticsSnapshot
from ..models.record import PersistedMapping, mapping_from_json, mapping_to_json

console = Console()

IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


def list_image_files(images_dir: Path) -> list[str]:
    """List image filenames in a directory.

    Args:
        images_dir: Directory to scan

    Returns:
        Sorted image filenames; empty when the directory is missing
    """
    if not images_dir.is_dir():
        console.print(f"[red]Images directory not found: {images_dir}[/red]")
        return []

    files = sorted(
        p.name for p in images_dir.iterdir() if p.is_file() and IMAGE_PATTERN.search(p.name)
    )
    console.print(f"[cyan]Found {len(files)} image files[/cyan]")
    return files


class MappingStore:
    """JSON persistence for the mapping, its backup and statistics."""

    def __init__(self, mapping_file: Path, backup_file: Path, stats_file: Path):
        """Initialize store.

        Args:
            mapping_file: Persisted mapping
            backup_file: Copy of the mapping taken before each save
            stats_file: Statistics snapshot
        """
        self.mapping_file = mapping_file
        self.backup_file = backup_file
        self.stats_file = stats_file
        self.load_error: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "MappingStore":
        return cls(
            mapping_file=settings.mapping_file,
            backup_file=settings.backup_file,
            stats_file=settings.stats_file,
        )

    def load(self) -> PersistedMapping:
        """Load existing categorizations.

        An unreadable or malformed file is reported and treated as empty;
        ``load_error`` records why so that a later save can refuse to
        overwrite it.

        Returns:
            Mapping of filename to record
        """
        self.load_error = None
        if not self.mapping_file.exists():
            return {}

        try:
            with open(self.mapping_file, encoding="utf-8") as f:
                mapping = mapping_from_json(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            self.load_error = str(e).splitlines()[0]
            console.print(f"[yellow]Error loading existing categories: {self.load_error}[/yellow]")
            return {}

        console.print(f"[green]Loaded {len(mapping)} existing categorizations[/green]")
        return mapping

    def save(self, mapping: PersistedMapping, force: bool = False) -> None:
        """Save the mapping, backing up the previous file first.

        Args:
            mapping: Mapping to write
            force: Overwrite even if the last load could not parse the file

        Raises:
            CorruptMappingError: If the file on disk failed to load and force is unset
        """
        if self.load_error and not force:
            raise CorruptMappingError(self.mapping_file, self.load_error)

        self.mapping_file.parent.mkdir(parents=True, exist_ok=True)
        if self.mapping_file.exists():
            shutil.copyfile(self.mapping_file, self.backup_file)

        self._write_json(self.mapping_file, mapping_to_json(mapping))
        self.load_error = None
        console.print(f"[green]Categories saved to {self.mapping_file}[/green]")

    def save_statistics(self, stats: StatisticsSnapshot) -> None:
        self._write_model(self.stats_file, stats)
        console.print(f"[green]Statistics saved to {self.stats_file}[/green]")

    def load_statistics(self) -> Optional[StatisticsSnapshot]:
        """Load the last statistics snapshot, if any."""
        if not self.stats_file.exists():
            return None

        with open(self.stats_file, encoding="utf-8") as f:
            return StatisticsSnapshot.model_validate(json.load(f))

    def _write_model(self, path: Path, model: BaseModel) -> None:
        self._write_json(path, model.model_dump(mode="json", by_alias=True))

    @staticmethod
    def _write_json(path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
