"""Review-file discovery and parsing.

Review documents look like::

    {"reviewDetails": {"reviewCollection": {"review": [
        {"hotelId": "...", "reviewId": "...", "ratingOverall": 4,
         "title": "...", "reviewText": "...", "isRecommended": "YES",
         "reviewSubmissionTime": "2016-06-29T17:50:37", "userNickname": "..."}
    ]}}}
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from hotel_catalog.hotels.models import RawReview
from hotel_catalog.hotels.normalizer import build_raw_review

from .source import SourceReadError, read_json_document

logger = logging.getLogger(__name__)

REVIEW_FILE_MARKER = ".json"


def iter_review_files(root: Path) -> Iterator[Path]:
    """Yield every file below ``root`` whose name contains ``.json``, in path order."""
    if not root.is_dir():
        raise SourceReadError(root, "review directory not found")
    for path in sorted(root.rglob("*")):
        if path.is_file() and REVIEW_FILE_MARKER in path.name:
            yield path


def _review_entries(document: Any) -> list | None:
    if not isinstance(document, dict):
        return None
    details = document.get("reviewDetails")
    if not isinstance(details, dict):
        return None
    collection = details.get("reviewCollection")
    if not isinstance(collection, dict):
        return None
    entries = collection.get("review")
    return entries if isinstance(entries, list) else None


def load_review_file(path: Path) -> list[RawReview]:
    document = read_json_document(path)
    entries = _review_entries(document)
    if entries is None:
        raise SourceReadError(path, "not a review document (missing reviewDetails.reviewCollection.review)")
    reviews: list[RawReview] = []
    for position, entry in enumerate(entries):
        raw = build_raw_review(entry)
        if raw is None:
            logger.warning("Skipping malformed review entry #%s in %s", position, path)
            continue
        reviews.append(raw)
    return reviews
