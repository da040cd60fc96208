"""Batch tasks."""

from .build import LoadSummary, build_catalog, run

__all__ = [
    "LoadSummary",
    "build_catalog",
    "run",
]
