"""Catalog composing the hotel and review indexes."""
from __future__ import annotations

import logging
from typing import Optional

from hotel_catalog.hotels.models import (
    Address,
    Hotel,
    HotelRow,
    RawReview,
    Review,
    ReviewError,
    ReviewOutcome,
)
from hotel_catalog.hotels.normalizer import format_submission_time

from .hotel_index import HotelIndex
from .review_index import ReviewIndex
from .views import SortedView

logger = logging.getLogger(__name__)

REVIEW_SEPARATOR = "-" * 20
HOTEL_SEPARATOR = "*" * 20
NEWLINE = "\n"


class Catalog:
    """Owns a :class:`HotelIndex` and a :class:`ReviewIndex`.

    Reviews are only accepted for hotels already in the catalog, so hotels
    must be loaded before their reviews.
    """

    def __init__(self, *, keep_duplicate_reviews: bool = False) -> None:
        self._hotels = HotelIndex()
        self._reviews = ReviewIndex(keep_duplicates=keep_duplicate_reviews)

    # ------------------------------------------------------------------
    # writes

    def add_hotel(
        self,
        hotel_id: str,
        name: str,
        city: str,
        state: str,
        street_address: str,
        latitude: float,
        longitude: float,
    ) -> Hotel:
        address = Address(
            city=city,
            state=state,
            street_address=street_address,
            latitude=latitude,
            longitude=longitude,
        )
        return self._hotels.put(hotel_id, name, address)

    def add_hotel_row(self, row: HotelRow) -> Hotel:
        return self.add_hotel(*row)

    def add_review(
        self,
        hotel_id: str,
        review_id: str,
        rating: int,
        title: str,
        text: str,
        recommended: bool,
        submitted: str,
        username: str,
    ) -> ReviewOutcome:
        raw = RawReview(
            hotel_id=hotel_id,
            review_id=review_id,
            rating=rating,
            title=title,
            text=text,
            recommended=recommended,
            submitted=submitted,
            username=username,
        )
        return self.add_raw_review(raw)

    def add_raw_review(self, raw: RawReview) -> ReviewOutcome:
        """Store ``raw`` if valid. The outcome is falsy and carries the reason on failure."""
        hotel_exists = self._hotels.get(raw.hotel_id) is not None
        outcome = self._reviews.add(raw, hotel_exists=hotel_exists)
        if outcome.error is ReviewError.DUPLICATE:
            logger.debug(
                "Ignoring review %s for hotel %s: same date, user and id as a stored review",
                raw.review_id,
                raw.hotel_id,
            )
        elif outcome.error is ReviewError.UNKNOWN_HOTEL:
            logger.warning("Rejected review %s: unknown hotel id %s", raw.review_id, raw.hotel_id)
        elif outcome.error is ReviewError.INVALID_RATING:
            logger.warning(
                "Rejected review %s for hotel %s: rating %s outside 1-5",
                raw.review_id,
                raw.hotel_id,
                raw.rating,
            )
        elif outcome.error is ReviewError.INVALID_DATE:
            logger.warning(
                "Rejected review %s for hotel %s: cannot parse date %r",
                raw.review_id,
                raw.hotel_id,
                raw.submitted,
            )
        return outcome

    # ------------------------------------------------------------------
    # queries

    def get_hotel(self, hotel_id: str) -> Optional[Hotel]:
        return self._hotels.get(hotel_id)

    def hotel_ids(self) -> SortedView[str]:
        return self._hotels.ids()

    def reviews(self, hotel_id: str) -> SortedView[Review]:
        return self._reviews.reviews(hotel_id)

    def average_rating(self, hotel_id: str) -> float:
        return self._reviews.average_rating(hotel_id)

    @property
    def hotel_count(self) -> int:
        return len(self._hotels)

    @property
    def review_count(self) -> int:
        return len(self._reviews)

    # ------------------------------------------------------------------
    # rendering

    def render(self, hotel_id: str) -> str:
        """Hotel header followed by its reviews; empty string for an unknown hotel."""
        hotel = self._hotels.get(hotel_id)
        if hotel is None:
            return ""
        lines = [
            f"{hotel.name}: {hotel.hotel_id}",
            hotel.address.street_address,
            f"{hotel.address.city}, {hotel.address.state}",
        ]
        for review in self._reviews.reviews(hotel_id):
            lines.extend(
                (
                    REVIEW_SEPARATOR,
                    f"Review by {review.username} on {format_submission_time(review.submitted_at)}",
                    f"Rating: {review.rating}",
                    review.title,
                    review.text,
                )
            )
        return NEWLINE.join(lines) + NEWLINE

    def render_all(self) -> str:
        parts: list[str] = []
        for hotel_id in self._hotels.ids():
            parts.append(NEWLINE + HOTEL_SEPARATOR + NEWLINE)
            parts.append(self.render(hotel_id))
        return "".join(parts)

    def to_records(self) -> list[dict[str, object]]:
        records: list[dict[str, object]] = []
        for hotel_id in self._hotels.ids():
            hotel = self._hotels.get(hotel_id)
            if hotel is None:  # pragma: no cover - ids and records are kept in step
                continue
            record = hotel.to_dict()
            record["average_rating"] = self.average_rating(hotel_id)
            record["reviews"] = [review.to_dict() for review in self._reviews.reviews(hotel_id)]
            records.append(record)
        return records
