"""
Review schemas.
"""

from travel_booking.schemas.review.review_submission import RatingResult, RatingSubmission, ReviewResponse

__all__ = ["RatingSubmission", "ReviewResponse", "RatingResult"]
