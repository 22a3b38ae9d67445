"""
Review service: rating completed bookings and keeping listing ratings
in step with their reviews.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from travel_booking.core.exceptions import (
    DuplicateReviewError,
    InvalidBookingStateError,
    RatingTooEarlyError,
    ValidationError,
)
from travel_booking.core.logging import track_performance
from travel_booking.core.utils import utc_now
from travel_booking.models.base import BookingStatus
from travel_booking.models.booking import Booking
from travel_booking.models.review import Review
from travel_booking.repositories.booking import BookingRepository
from travel_booking.repositories.catalog import CatalogRepository
from travel_booking.repositories.review import ReviewRepository
from travel_booking.schemas.review import RatingResult, RatingSubmission, ReviewResponse
from travel_booking.services.base import BaseService, ServiceResult

RatingInput = Union[RatingSubmission, Dict[str, Any]]


class ReviewService(BaseService[Review, ReviewRepository]):
    """
    Accept one rating per completed booking.

    The review insert, the average recomputation and the write-back to the
    listing share a transaction, with the listing row locked first so
    concurrent ratings of the same listing are applied one after another.
    """

    def __init__(
        self,
        db_session: Session,
        repository: Optional[ReviewRepository] = None,
        booking_repository: Optional[BookingRepository] = None,
        catalog_repository: Optional[CatalogRepository] = None,
    ):
        super().__init__(repository or ReviewRepository(db_session), db_session)
        self.bookings = booking_repository or BookingRepository(db_session)
        self.catalog = catalog_repository or CatalogRepository(db_session)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _ensure_rateable(self, booking: Booking, user_id: UUID, now: datetime) -> None:
        if booking.status != BookingStatus.COMPLETED:
            raise InvalidBookingStateError(
                "You can only rate completed bookings",
                booking_id=str(booking.id),
                current_status=booking.status.value,
                allowed_statuses=[BookingStatus.COMPLETED.value],
            )
        if not booking.trip_ended_by(now):
            raise RatingTooEarlyError(
                "You can only rate after the trip ends",
                booking_id=str(booking.id),
                check_out=booking.check_out.isoformat(),
            )
        if self.repository.find_by_user_and_booking(user_id, booking.id) is not None:
            raise DuplicateReviewError(str(booking.id), str(user_id))

    # -------------------------------------------------------------------------
    # Rating
    # -------------------------------------------------------------------------

    @track_performance("submit_rating")
    def submit_rating(
        self,
        booking_id: UUID,
        user_id: UUID,
        data: RatingInput,
        now: Optional[datetime] = None,
    ) -> ServiceResult[RatingResult]:
        """
        Rate a completed booking and refresh the listing's average.

        Args:
            booking_id: Booking being rated
            user_id: Rating user, must own the booking
            data: Rating (1-5) and optional comment
            now: Reference time for the trip-ended check (defaults to now, UTC)

        Returns:
            ServiceResult containing the review and the new listing rating
        """
        now = now or utc_now()
        try:
            booking = self.bookings.get_for_user(booking_id, user_id)
            submission = self._parse(RatingSubmission, data, root_field="rating")
            self._ensure_rateable(booking, user_id, now)

            ref = booking.offerable_ref
            if ref is None:
                raise ValidationError(
                    "Booking does not reference a reviewable listing",
                    {"booking_id": ["No destination, package or offer found for this booking"]},
                )

            with self.transaction():
                offerable = self.catalog.lock_offerable(ref)
                review = self.repository.create_review(
                    Review(
                        user_id=user_id,
                        booking_id=booking.id,
                        reviewable_type=ref.kind,
                        reviewable_id=ref.id,
                        rating=submission.rating,
                        comment=submission.comment,
                    )
                )
                average = self.repository.average_rating(ref)
                self.catalog.update_rating(offerable, average)

            self._log_operation(
                "Booking rated",
                booking.id,
                {"offerable": str(ref), "rating": submission.rating, "offerable_rating": str(average)},
            )
            return ServiceResult.success(
                RatingResult(
                    review=ReviewResponse.model_validate(review),
                    offerable_type=ref.kind,
                    offerable_id=ref.id,
                    offerable_rating=average,
                ),
                message="Thank you for your rating!",
            )
        except Exception as e:
            return self._handle_exception(e, "submit rating", booking_id)
