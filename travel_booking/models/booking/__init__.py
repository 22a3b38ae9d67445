"""
Booking models.
"""

from travel_booking.models.booking.booking import Booking, generate_confirmation_code

__all__ = ["Booking", "generate_confirmation_code"]
