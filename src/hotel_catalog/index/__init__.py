"""In-memory hotel and review indexes."""

from .catalog import Catalog
from .hotel_index import HotelIndex
from .review_index import ReviewIndex, review_sort_key
from .views import SortedView

__all__ = [
    "Catalog",
    "HotelIndex",
    "ReviewIndex",
    "SortedView",
    "review_sort_key",
]
