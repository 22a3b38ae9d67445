"""
Data access layer.
"""

from travel_booking.repositories.base import BaseRepository
from travel_booking.repositories.booking import BookingRepository, BookingStatistics
from travel_booking.repositories.catalog import CatalogRepository
from travel_booking.repositories.review import ReviewRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "BookingStatistics",
    "CatalogRepository",
    "ReviewRepository",
]
