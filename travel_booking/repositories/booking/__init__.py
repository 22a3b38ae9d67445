"""
Booking repository.
"""

from travel_booking.repositories.booking.booking_repository import BookingRepository, BookingStatistics

__all__ = ["BookingRepository", "BookingStatistics"]
