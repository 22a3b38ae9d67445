"""
Booking cancellation service.

Users may cancel their own pending or confirmed bookings within a grace
window after booking. Companies may cancel bookings for their listings at
any time while the status still allows it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from travel_booking.config.settings import settings
from travel_booking.core.exceptions import CancellationWindowExpiredError, InvalidBookingStateError
from travel_booking.core.logging import track_performance
from travel_booking.core.utils import utc_now
from travel_booking.models.base import BookingStatus
from travel_booking.models.booking import Booking
from travel_booking.repositories.booking import BookingRepository
from travel_booking.schemas.booking import BookingResponse
from travel_booking.services.base import BaseService, ServiceResult

CANCELLABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)


class BookingCancellationService(BaseService[Booking, BookingRepository]):
    """
    Handle booking cancellations.

    Features:
    - Owner cancellation bounded by ``CANCELLATION_WINDOW_HOURS``
    - Company cancellation without a time limit
    """

    def __init__(
        self,
        db_session: Session,
        repository: Optional[BookingRepository] = None,
        window_hours: Optional[int] = None,
    ):
        super().__init__(repository or BookingRepository(db_session), db_session)
        self.window_hours = window_hours if window_hours is not None else settings.CANCELLATION_WINDOW_HOURS

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _ensure_cancellable(self, booking: Booking) -> None:
        if booking.status not in CANCELLABLE_STATUSES:
            raise InvalidBookingStateError(
                f"Booking cannot be cancelled in status {booking.status.value}",
                booking_id=str(booking.id),
                current_status=booking.status.value,
                allowed_statuses=[status.value for status in CANCELLABLE_STATUSES],
            )

    def _ensure_within_window(self, booking: Booking, now: datetime) -> None:
        if not booking.within_cancellation_window(now, self.window_hours):
            elapsed = booking.time_since_created(now)
            raise CancellationWindowExpiredError(
                f"Cancellation period has expired ({self.window_hours} hours)",
                booking_id=str(booking.id),
                window_hours=self.window_hours,
                hours_elapsed=round(elapsed.total_seconds() / 3600, 2),
            )

    # -------------------------------------------------------------------------
    # Cancellation Operations
    # -------------------------------------------------------------------------

    @track_performance("cancel_booking")
    def cancel_booking(
        self,
        booking_id: UUID,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> ServiceResult[BookingResponse]:
        """
        Cancel the user's own booking.

        Args:
            booking_id: Booking to cancel
            user_id: Requesting user, must own the booking
            now: Reference time for the window check (defaults to now, UTC)

        Returns:
            ServiceResult containing the cancelled booking or error
        """
        now = now or utc_now()
        try:
            booking = self.repository.get_for_user(booking_id, user_id)
            self._ensure_cancellable(booking)
            self._ensure_within_window(booking, now)

            with self.transaction():
                booking.cancel(at=now)
                self.repository.update(booking)

            self._log_operation("Booking cancelled by user", booking.id, {"booking_user": str(user_id)})
            return ServiceResult.success(
                BookingResponse.model_validate(booking),
                message="Booking cancelled successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "cancel booking", booking_id)

    @track_performance("cancel_company_booking")
    def cancel_company_booking(
        self,
        booking_id: UUID,
        company_id: UUID,
        now: Optional[datetime] = None,
    ) -> ServiceResult[BookingResponse]:
        """Cancel a booking for one of the company's listings."""
        now = now or utc_now()
        try:
            booking = self.repository.get_for_company(booking_id, company_id)
            self._ensure_cancellable(booking)

            with self.transaction():
                booking.cancel(at=now)
                self.repository.update(booking)

            self._log_operation("Booking cancelled by company", booking.id, {"company_id": str(company_id)})
            return ServiceResult.success(
                BookingResponse.model_validate(booking),
                message="Booking cancelled successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "cancel company booking", booking_id)
