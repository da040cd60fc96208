"""Load hotels and reviews into a catalog and write the report."""
from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hotel_catalog.config.settings import Settings
from hotel_catalog.hotels.models import HotelRow, RawReview, ReviewError
from hotel_catalog.index import Catalog
from hotel_catalog.loaders import (
    SourceReadError,
    iter_review_files,
    load_hotels,
    load_review_file,
)
from hotel_catalog.storage import ReportWriter

logger = logging.getLogger(__name__)


@dataclass
class LoadSummary:
    """Counters collected during one load pass."""

    hotels: int = 0
    review_files: int = 0
    failed_files: list[Path] = field(default_factory=list)
    reviews_accepted: int = 0
    rejected: Counter = field(default_factory=Counter)
    report_path: Optional[Path] = None
    json_path: Optional[Path] = None

    @property
    def reviews_rejected(self) -> int:
        return sum(self.rejected.values())

    def to_dict(self) -> dict[str, object]:
        return {
            "hotels": self.hotels,
            "review_files": self.review_files,
            "failed_files": [str(path) for path in self.failed_files],
            "reviews_accepted": self.reviews_accepted,
            "reviews_rejected": {error.value: count for error, count in self.rejected.items()},
            "report_path": str(self.report_path) if self.report_path else None,
            "json_path": str(self.json_path) if self.json_path else None,
        }


def _read_hotel_rows(path: Path) -> list[HotelRow]:
    return list(load_hotels(path))


def _list_review_files(root: Path) -> list[Path]:
    return list(iter_review_files(root))


async def _parse_review_files(paths: list[Path], concurrency: int) -> list[list[RawReview] | BaseException]:
    semaphore = asyncio.Semaphore(concurrency)

    async def _parse(path: Path) -> list[RawReview]:
        async with semaphore:
            return await asyncio.to_thread(load_review_file, path)

    return await asyncio.gather(*(_parse(path) for path in paths), return_exceptions=True)


async def build_catalog(settings: Settings) -> tuple[Catalog, LoadSummary]:
    """Build a catalog from the configured sources.

    Review files are parsed on worker threads, but every insert runs here on
    the event loop, in sorted file order, so the catalog never sees concurrent
    writes and the outcome does not depend on which file finishes first.
    """
    catalog = Catalog(keep_duplicate_reviews=settings.keep_duplicate_reviews)
    summary = LoadSummary()

    try:
        rows = await asyncio.to_thread(_read_hotel_rows, settings.hotels_path)
    except SourceReadError as exc:
        logger.error("Could not load hotels: %s", exc)
        summary.failed_files.append(settings.hotels_path)
        rows = []
    for row in rows:
        catalog.add_hotel_row(row)
    summary.hotels = catalog.hotel_count
    logger.info("Loaded %s hotels from %s", summary.hotels, settings.hotels_path)

    try:
        paths = await asyncio.to_thread(_list_review_files, settings.reviews_dir)
    except SourceReadError as exc:
        logger.error("Could not scan reviews: %s", exc)
        paths = []

    results = await _parse_review_files(paths, settings.load_concurrency)
    for path, result in zip(paths, results):
        if isinstance(result, SourceReadError):
            logger.warning("Skipping review file %s", result)
            summary.failed_files.append(path)
            continue
        if isinstance(result, BaseException):
            raise result
        summary.review_files += 1
        for raw in result:
            outcome = catalog.add_raw_review(raw)
            if outcome:
                summary.reviews_accepted += 1
            else:
                summary.rejected[outcome.error] += 1

    logger.info(
        "Indexed %s reviews from %s files (%s rejected, %s files skipped)",
        summary.reviews_accepted,
        summary.review_files,
        summary.reviews_rejected,
        len(summary.failed_files),
    )
    if summary.rejected.get(ReviewError.DUPLICATE):
        logger.info("Dropped %s duplicate reviews", summary.rejected[ReviewError.DUPLICATE])
    return catalog, summary


async def run(settings: Settings) -> tuple[Catalog, LoadSummary]:
    """Build the catalog, then write the text report (and JSON export when configured)."""
    catalog, summary = await build_catalog(settings)
    writer = ReportWriter(settings.output_dir)

    if catalog.hotel_count:
        summary.report_path = await asyncio.to_thread(
            writer.write_report, catalog.render_all(), filename=settings.report_filename
        )
        logger.info("Wrote report for %s hotels to %s", catalog.hotel_count, summary.report_path)
    else:
        logger.warning("No hotels loaded; report not written")

    if settings.json_export_filename:
        summary.json_path = await asyncio.to_thread(
            writer.write_json, catalog.to_records(), filename=settings.json_export_filename
        )
        logger.info("Exported catalog JSON to %s", summary.json_path)

    return catalog, summary
