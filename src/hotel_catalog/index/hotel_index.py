"""Primary index: hotels ordered by identifier."""
from __future__ import annotations

from bisect import insort
from typing import Optional

from hotel_catalog.hotels.models import Address, Hotel

from .views import SortedView


class HotelIndex:
    """Maps hotel id to :class:`Hotel`, iterated in ascending id order."""

    def __init__(self) -> None:
        self._hotels: dict[str, Hotel] = {}
        self._ids: list[str] = []

    def put(self, hotel_id: str, name: str, address: Address) -> Hotel:
        """Insert the hotel, silently replacing any earlier record with the same id."""
        hotel = Hotel(hotel_id=hotel_id, name=name, address=address)
        if hotel_id not in self._hotels:
            insort(self._ids, hotel_id)
        self._hotels[hotel_id] = hotel
        return hotel

    def get(self, hotel_id: str) -> Optional[Hotel]:
        return self._hotels.get(hotel_id)

    def ids(self) -> SortedView[str]:
        return SortedView(self._ids)

    def __contains__(self, hotel_id: object) -> bool:
        return hotel_id in self._hotels

    def __len__(self) -> int:
        return len(self._hotels)
