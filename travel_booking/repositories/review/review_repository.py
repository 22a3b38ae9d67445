"""
Review repository: duplicate checks and rating aggregation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from travel_booking.core.exceptions import DatabaseError, DuplicateReviewError
from travel_booking.models.base import OfferableRef
from travel_booking.models.review import Review
from travel_booking.repositories.base.base_repository import BaseRepository, is_unique_violation

RATING_QUANTUM = Decimal("0.1")


class ReviewRepository(BaseRepository[Review]):
    """Repository for reviews of booked listings."""

    def __init__(self, db: Session):
        super().__init__(Review, db)

    def find_by_user_and_booking(self, user_id: UUID, booking_id: UUID) -> Optional[Review]:
        stmt = select(Review).where(Review.user_id == user_id, Review.booking_id == booking_id)
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Review lookup failed: {str(e)}") from e

    def create_review(self, review: Review) -> Review:
        """
        Insert a review.

        Raises:
            DuplicateReviewError: If the user already reviewed the booking
        """
        self.db.add(review)
        try:
            self.db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateReviewError(str(review.booking_id), str(review.user_id)) from e
            raise DatabaseError(f"Review violates a database constraint: {str(e.orig)}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Review insert failed: {str(e)}") from e
        return review

    def average_rating(self, ref: OfferableRef) -> Optional[Decimal]:
        """
        Mean rating of all reviews for a listing, half-up to one decimal.

        Computed from the integer sum and count so the result does not
        depend on floating point or on insertion order.
        """
        stmt = select(func.sum(Review.rating), func.count(Review.id)).where(
            Review.reviewable_type == ref.kind,
            Review.reviewable_id == ref.id,
        )
        try:
            total, count = self.db.execute(stmt).one()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Rating aggregation failed: {str(e)}") from e
        if not count:
            return None
        return (Decimal(total) / Decimal(count)).quantize(RATING_QUANTUM, rounding=ROUND_HALF_UP)
