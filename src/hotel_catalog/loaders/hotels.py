"""Hotel-list loader.

Expects a document shaped like::

    {"sr": [{"id": "...", "f": "name", "ci": "city", "pr": "state",
             "ad": "street", "ll": {"lat": "37.78", "lng": "-122.4"}}]}
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from hotel_catalog.hotels.models import HotelRow
from hotel_catalog.hotels.normalizer import build_hotel_row

from .source import SourceReadError, read_json_document

logger = logging.getLogger(__name__)


def load_hotels(path: Path) -> Iterator[HotelRow]:
    document = read_json_document(path)
    entries = document.get("sr") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        raise SourceReadError(path, "expected a top-level 'sr' list of hotels")
    return _iter_rows(path, entries)


def _iter_rows(path: Path, entries: list) -> Iterator[HotelRow]:
    for position, entry in enumerate(entries):
        row = build_hotel_row(entry)
        if row is None:
            logger.warning("Skipping malformed hotel entry #%s in %s", position, path)
            continue
        yield row
