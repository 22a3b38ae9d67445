"""
Review models.
"""

from travel_booking.models.review.review import Review

__all__ = ["Review"]
