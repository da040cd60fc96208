"""Loaders for hotel-list and review JSON documents."""

from .hotels import load_hotels
from .reviews import iter_review_files, load_review_file
from .source import SourceReadError, read_json_document

__all__ = [
    "SourceReadError",
    "iter_review_files",
    "load_hotels",
    "load_review_file",
    "read_json_document",
]
