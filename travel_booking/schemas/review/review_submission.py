"""
Review schemas for rating completed bookings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from travel_booking.config.settings import settings
from travel_booking.models.base import OfferableKind
from travel_booking.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "RatingSubmission",
    "ReviewResponse",
    "RatingResult",
]


class RatingSubmission(BaseCreateSchema):
    """Star rating with an optional comment."""

    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5",
    )
    comment: Optional[str] = Field(
        None,
        max_length=settings.REVIEW_COMMENT_MAX_LENGTH,
        description="Optional review text",
    )

    @field_validator("comment")
    @classmethod
    def blank_comment_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ReviewResponse(BaseResponseSchema):
    user_id: UUID
    booking_id: UUID
    reviewable_type: OfferableKind
    reviewable_id: UUID
    rating: int
    comment: Optional[str] = None


class RatingResult(BaseSchema):
    """Stored review plus the listing's recomputed rating."""

    review: ReviewResponse
    offerable_type: OfferableKind
    offerable_id: UUID
    offerable_rating: Decimal = Field(..., description="Mean rating, one decimal place")
