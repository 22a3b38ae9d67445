"""
Review services.
"""

from travel_booking.services.review.review_service import ReviewService

__all__ = ["ReviewService"]
