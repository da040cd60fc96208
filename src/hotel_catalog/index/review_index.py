"""Secondary index: per-hotel reviews in composite order.

Reviews for one hotel are kept sorted by

1. submission time, most recent first;
2. reviewer name, ascending;
3. review id, ascending.

Two reviews that agree on all three keys are the same entry: the first one
stored wins and the later one is reported as ``DUPLICATE``. An index built
with ``keep_duplicates=True`` appends an insertion sequence number to the key
instead, so colliding reviews are all kept in arrival order.
"""
from __future__ import annotations

from bisect import bisect_left
from datetime import datetime, timedelta
from typing import Optional

from hotel_catalog.hotels.models import RawReview, Review, ReviewError, ReviewOutcome
from hotel_catalog.hotels.normalizer import parse_submission_time

from .views import DeferredView, SortedView

MIN_RATING = 1
MAX_RATING = 5

_EPOCH = datetime(1970, 1, 1)
_MICROSECOND = timedelta(microseconds=1)

# Keys gain a trailing insertion sequence number when duplicates are kept.
SortKey = tuple[int, str, str] | tuple[int, str, str, int]


def review_sort_key(review: Review) -> tuple[int, str, str]:
    """Composite key; ascending key order is the review display order."""
    elapsed = (review.submitted_at - _EPOCH) // _MICROSECOND
    return (-elapsed, review.username, review.review_id)


class _HotelReviews:
    """Parallel sorted lists of keys and reviews for a single hotel."""

    __slots__ = ("keys", "reviews")

    def __init__(self) -> None:
        self.keys: list[SortKey] = []
        self.reviews: list[Review] = []

    def insert(self, key: SortKey, review: Review) -> bool:
        position = bisect_left(self.keys, key)
        if position < len(self.keys) and self.keys[position] == key:
            return False
        self.keys.insert(position, key)
        self.reviews.insert(position, review)
        return True


class ReviewIndex:
    """Maps hotel id to its ordered reviews."""

    def __init__(self, *, keep_duplicates: bool = False) -> None:
        self._keep_duplicates = keep_duplicates
        self._by_hotel: dict[str, _HotelReviews] = {}
        self._sequence = 0
        self._size = 0

    @property
    def keep_duplicates(self) -> bool:
        return self._keep_duplicates

    def add(self, raw: RawReview, *, hotel_exists: bool) -> ReviewOutcome:
        """Validate ``raw`` and store it. Never raises for bad data."""
        if not hotel_exists:
            return ReviewOutcome.rejected(ReviewError.UNKNOWN_HOTEL)
        if not MIN_RATING <= raw.rating <= MAX_RATING:
            return ReviewOutcome.rejected(ReviewError.INVALID_RATING)
        submitted_at = parse_submission_time(raw.submitted)
        if submitted_at is None:
            return ReviewOutcome.rejected(ReviewError.INVALID_DATE)

        review = Review(
            hotel_id=raw.hotel_id,
            review_id=raw.review_id,
            rating=raw.rating,
            title=raw.title,
            text=raw.text,
            recommended=raw.recommended,
            submitted_at=submitted_at,
            username=raw.username,
        )
        key: SortKey = review_sort_key(review)
        if self._keep_duplicates:
            self._sequence += 1
            key = key + (self._sequence,)

        bucket = self._by_hotel.get(review.hotel_id)
        if bucket is None:
            bucket = self._by_hotel[review.hotel_id] = _HotelReviews()
        if not bucket.insert(key, review):
            return ReviewOutcome.rejected(ReviewError.DUPLICATE)
        self._size += 1
        return ReviewOutcome.accepted(review)

    def reviews(self, hotel_id: str) -> SortedView[Review]:
        bucket = self._by_hotel.get(hotel_id)
        if bucket is None:
            return DeferredView(lambda: self._stored_reviews(hotel_id))
        return SortedView(bucket.reviews)

    def _stored_reviews(self, hotel_id: str) -> list[Review]:
        bucket = self._by_hotel.get(hotel_id)
        return bucket.reviews if bucket else []

    def count(self, hotel_id: str) -> int:
        bucket = self._by_hotel.get(hotel_id)
        return len(bucket.reviews) if bucket else 0

    def average_rating(self, hotel_id: str) -> float:
        """Mean rating, or 0.0 when the hotel has no reviews (or is unknown)."""
        bucket: Optional[_HotelReviews] = self._by_hotel.get(hotel_id)
        if not bucket or not bucket.reviews:
            return 0.0
        total = sum(review.rating for review in bucket.reviews)
        return total / len(bucket.reviews)

    def __len__(self) -> int:
        return self._size
