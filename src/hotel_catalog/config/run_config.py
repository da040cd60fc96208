"""TOML run profiles layered on top of environment settings."""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:  # pragma: no cover
    from hotel_catalog.config.settings import Settings


class SourcesSection(BaseModel):
    """Input locations."""

    hotels: Optional[str] = Field(default=None, description="Hotel list JSON file")
    reviews: Optional[str] = Field(default=None, description="Root directory of review files")

    @field_validator("hotels", "reviews", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class OutputSection(BaseModel):
    """Report destinations."""

    directory: Optional[str] = None
    report_filename: Optional[str] = None
    json_export_filename: Optional[str] = None
    log_level: Optional[str] = None


class LoadingSection(BaseModel):
    concurrency: Optional[int] = Field(default=None, ge=1)
    keep_duplicate_reviews: Optional[bool] = None


class RunConfig(BaseModel):
    """Top-level configuration decoded from TOML."""

    profile: str = Field(default="default", description="Human label used for logging")
    title: Optional[str] = None
    notes: Optional[str] = None
    sources: SourcesSection = Field(default_factory=SourcesSection)
    output: OutputSection = Field(default_factory=OutputSection)
    loading: LoadingSection = Field(default_factory=LoadingSection)

    @classmethod
    def load(cls, path: Path) -> "RunConfig":
        """Load a config from a TOML file."""
        data = tomllib.loads(path.read_text())
        return cls.model_validate(data)

    def apply_to(self, settings: "Settings", *, base_dir: Optional[Path] = None) -> None:
        """Apply overrides to an existing Settings instance."""
        sources = self.sources
        if sources.hotels:
            settings.hotels_path = _resolve_path(sources.hotels, base_dir)
        if sources.reviews:
            settings.reviews_dir = _resolve_path(sources.reviews, base_dir)

        output = self.output
        if output.directory:
            settings.output_dir = _resolve_path(output.directory, base_dir)
        if output.report_filename:
            settings.report_filename = output.report_filename
        if output.json_export_filename is not None:
            settings.json_export_filename = output.json_export_filename
        if output.log_level:
            settings.log_level = output.log_level

        loading = self.loading
        if loading.concurrency is not None:
            settings.load_concurrency = loading.concurrency
        if loading.keep_duplicate_reviews is not None:
            settings.keep_duplicate_reviews = loading.keep_duplicate_reviews


def _resolve_path(raw: str, base_dir: Optional[Path]) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute() and base_dir:
        return (base_dir / path).resolve()
    return path


__all__ = ["RunConfig"]
