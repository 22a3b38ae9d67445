"""
Review model for rated bookings.

A review belongs to one completed booking and rates the listing that
booking referenced.
"""

from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship, validates

from travel_booking.models.base import BaseModel, OfferableKind, TimestampMixin

__all__ = ["Review"]


class Review(BaseModel, TimestampMixin):
    """
    User rating of a destination, package or offer.

    ``reviewable_type`` and ``reviewable_id`` identify the rated listing;
    at most one review exists per (user_id, booking_id).
    """

    __tablename__ = "reviews"

    id = Column(Uuid, primary_key=True, default=uuid4)

    user_id = Column(Uuid, nullable=False, index=True)
    booking_id = Column(
        Uuid,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    reviewable_type = Column(
        Enum(
            OfferableKind,
            native_enum=False,
            values_callable=lambda kinds: [kind.value for kind in kinds],
            length=20,
            name="reviewable_type",
        ),
        nullable=False,
    )
    reviewable_id = Column(Uuid, nullable=False)

    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)

    booking = relationship("Booking", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("user_id", "booking_id", name="uq_review_user_booking"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
        Index("ix_review_reviewable", "reviewable_type", "reviewable_id"),
    )

    @validates("rating")
    def validate_rating(self, key, value):
        if value < 1 or value > 5:
            raise ValueError("Rating must be between 1 and 5")
        return value

    def __repr__(self):
        return f"<Review(id={self.id}, booking_id={self.booking_id}, rating={self.rating})>"
