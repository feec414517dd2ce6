"""Configuration management."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Input settings
    images_dir: Path = Field(default=Path("images"), description="Directory holding product images")
    categories_config: Optional[Path] = Field(
        default=None,
        description="YAML file with category definitions (packaged defaults when unset)",
    )

    # Categorization settings
    confidence_threshold: float = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum confidence for auto-accepting a categorization",
    )

    # Output settings
    data_dir: Path = Field(default=Path("."), description="Directory for mapping, statistics and reports")
    mapping_filename: str = Field(default="image-categories.json", description="Persisted mapping file")
    backup_filename: str = Field(default="image-categories-backup.json", description="Backup of the previous mapping")
    stats_filename: str = Field(default="categorization-stats.json", description="Statistics snapshot file")
    report_filename: str = Field(default="categorization-report.json", description="Report file")

    @property
    def mapping_file(self) -> Path:
        return self.data_dir / self.mapping_filename

    @property
    def backup_file(self) -> Path:
        return self.data_dir / self.backup_filename

    @property
    def stats_file(self) -> Path:
        return self.data_dir / self.stats_filename

    @property
    def report_file(self) -> Path:
        return self.data_dir / self.report_filename

    def ensure_directories(self) -> None:
        """Create output directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
