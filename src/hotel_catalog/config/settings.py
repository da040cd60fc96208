"""Runtime configuration for catalog builds.

Relies on pydantic-settings so that environment variables (prefixed with ``HOTELS_``)
can override defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Captures runtime configuration for loading and reporting."""

    hotels_path: Path = Field(
        default=Path("data/hotels/hotels.json"), description="Hotel list document"
    )
    reviews_dir: Path = Field(
        default=Path("data/reviews"), description="Directory searched recursively for review documents"
    )
    output_dir: Path = Field(default=Path("output"), description="Directory receiving reports")
    report_filename: str = Field(default="hotels.txt", description="Text report written under output_dir")
    json_export_filename: Optional[str] = Field(
        default=None, description="When set, also export the catalog as JSON under output_dir"
    )
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    log_filename: str = Field(default="hotel_catalog.log", description="Log file written under log_dir")
    load_concurrency: int = Field(
        default=4, description="Maximum review files parsed at the same time"
    )
    keep_duplicate_reviews: bool = Field(
        default=False,
        description="Keep reviews whose date, user and id all match a stored review",
    )

    model_config = SettingsConfigDict(
        env_prefix="HOTELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
        validate_assignment=True,
    )

    @field_validator("hotels_path", "reviews_dir", "output_dir", "log_dir", mode="before")
    def _expand_path(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()

    @field_validator("json_export_filename", mode="before")
    def _blank_export(cls, value: str | None) -> Optional[str]:
        if value in (None, ""):
            return None
        return value

    @field_validator("load_concurrency")
    def _validate_concurrency(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("load_concurrency must be positive")
        return value

    @property
    def report_path(self) -> Path:
        return self.output_dir / self.report_filename

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)
