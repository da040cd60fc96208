"""Hotel domain models and normalization helpers."""

from .models import (
    Address,
    Hotel,
    HotelRow,
    RawReview,
    Review,
    ReviewError,
    ReviewOutcome,
)
from .normalizer import (
    build_hotel_row,
    build_raw_review,
    format_submission_time,
    parse_submission_time,
)

__all__ = [
    "Address",
    "Hotel",
    "HotelRow",
    "RawReview",
    "Review",
    "ReviewError",
    "ReviewOutcome",
    "build_hotel_row",
    "build_raw_review",
    "format_submission_time",
    "parse_submission_time",
]
