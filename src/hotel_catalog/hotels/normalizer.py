"""Utilities to transform raw hotel/review JSON entries into typed rows."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from .models import HotelRow, RawReview

logger = logging.getLogger(__name__)

SUBMISSION_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Fixed English names so rendered dates do not depend on the process locale.
_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_submission_time(value: str | None) -> Optional[datetime]:
    """Parse ``yyyy-MM-ddTHH:mm:ss``; return None when the value does not match."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, SUBMISSION_FORMAT)
    except ValueError:
        return None


def format_submission_time(value: datetime) -> str:
    """Render a timestamp as ``Wed Mar 04 10:10:16 2015``."""
    return (
        f"{_DAY_NAMES[value.weekday()]} {_MONTH_NAMES[value.month - 1]} "
        f"{value.day:02d} {value:%H:%M:%S} {value.year}"
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_recommended(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return _text(value).strip().upper() != "NO"


def _parse_rating(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(_text(value).strip())
    except ValueError:
        return None


def build_hotel_row(entry: dict[str, Any]) -> Optional[HotelRow]:
    """Flatten one ``sr`` entry of the hotel list; None when required keys are missing."""
    if not isinstance(entry, dict):
        return None
    hotel_id = entry.get("id")
    location = entry.get("ll")
    if hotel_id in (None, "") or not isinstance(location, dict):
        return None
    try:
        latitude = float(location["lat"])
        longitude = float(location["lng"])
    except (KeyError, TypeError, ValueError):
        return None
    return HotelRow(
        hotel_id=_text(hotel_id),
        name=_text(entry.get("f")),
        city=_text(entry.get("ci")),
        state=_text(entry.get("pr")),
        street_address=_text(entry.get("ad")),
        latitude=latitude,
        longitude=longitude,
    )


def build_raw_review(entry: dict[str, Any]) -> Optional[RawReview]:
    """Flatten one review entry. Rating range and date are validated later by the index."""
    if not isinstance(entry, dict):
        return None
    hotel_id = entry.get("hotelId")
    review_id = entry.get("reviewId")
    if hotel_id in (None, "") or review_id in (None, ""):
        return None
    rating = _parse_rating(entry.get("ratingOverall"))
    if rating is None:
        logger.warning(
            "Review %s for hotel %s has a non-integer rating %r",
            review_id,
            hotel_id,
            entry.get("ratingOverall"),
        )
        return None
    return RawReview(
        hotel_id=_text(hotel_id),
        review_id=_text(review_id),
        rating=rating,
        title=_text(entry.get("title")),
        text=_text(entry.get("reviewText")),
        recommended=_parse_recommended(entry.get("isRecommended")),
        submitted=_text(entry.get("reviewSubmissionTime")),
        username=_text(entry.get("userNickname")),
    )
