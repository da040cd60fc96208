"""Dataclasses for hotels, addresses and reviews."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional


class HotelRow(NamedTuple):
    """Flat hotel entry as produced by the hotel-list loader."""

    hotel_id: str
    name: str
    city: str
    state: str
    street_address: str
    latitude: float
    longitude: float


class RawReview(NamedTuple):
    """Unvalidated review entry as produced by the review-file loader."""

    hotel_id: str
    review_id: str
    rating: int
    title: str
    text: str
    recommended: bool
    submitted: str
    username: str


@dataclass(frozen=True, slots=True)
class Address:
    city: str
    state: str
    street_address: str
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, object]:
        return {
            "city": self.city,
            "state": self.state,
            "street_address": self.street_address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True, slots=True)
class Hotel:
    """Hotel record keyed by ``hotel_id``."""

    hotel_id: str
    name: str
    address: Address

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_id": self.hotel_id,
            "name": self.name,
            "address": self.address.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Review:
    """Validated review; ``submitted_at`` is a naive local timestamp."""

    hotel_id: str
    review_id: str
    rating: int
    title: str
    text: str
    recommended: bool
    submitted_at: datetime
    username: str

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_id": self.hotel_id,
            "review_id": self.review_id,
            "rating": self.rating,
            "title": self.title,
            "text": self.text,
            "recommended": self.recommended,
            "submitted_at": self.submitted_at.isoformat(),
            "username": self.username,
        }


class ReviewError(str, Enum):
    """Reasons a review is not stored."""

    UNKNOWN_HOTEL = "unknown_hotel"
    INVALID_RATING = "invalid_rating"
    INVALID_DATE = "invalid_date"
    DUPLICATE = "duplicate"


@dataclass(frozen=True, slots=True)
class ReviewOutcome:
    """Result of adding a review. Truthy when the review was stored."""

    review: Optional[Review] = None
    error: Optional[ReviewError] = None

    def __bool__(self) -> bool:
        return self.error is None

    @classmethod
    def accepted(cls, review: Review) -> "ReviewOutcome":
        return cls(review=review)

    @classmethod
    def rejected(cls, error: ReviewError) -> "ReviewOutcome":
        return cls(error=error)
