"""
Company-side booking transitions: confirmation and completion.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from travel_booking.core.utils import utc_now
from travel_booking.models.booking import Booking
from travel_booking.repositories.booking import BookingRepository
from travel_booking.schemas.booking import BookingResponse
from travel_booking.services.base import BaseService, ServiceResult


class BookingApprovalService(BaseService[Booking, BookingRepository]):
    """
    Move a company's bookings forward.

    pending -> confirmed when the company accepts, confirmed -> completed
    once the trip took place. Illegal moves fail with INVALID_STATE.
    """

    def __init__(self, db_session: Session, repository: Optional[BookingRepository] = None):
        super().__init__(repository or BookingRepository(db_session), db_session)

    def confirm_booking(
        self,
        booking_id: UUID,
        company_id: UUID,
        now: Optional[datetime] = None,
    ) -> ServiceResult[BookingResponse]:
        """Confirm a pending booking."""
        try:
            booking = self.repository.get_for_company(booking_id, company_id)
            with self.transaction():
                booking.confirm(at=now or utc_now())
                self.repository.update(booking)

            self._log_operation("Booking confirmed", booking.id, {"company_id": str(company_id)})
            return ServiceResult.success(
                BookingResponse.model_validate(booking),
                message="Booking confirmed successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "confirm booking", booking_id)

    def complete_booking(
        self,
        booking_id: UUID,
        company_id: UUID,
        now: Optional[datetime] = None,
    ) -> ServiceResult[BookingResponse]:
        """Mark a confirmed booking as completed."""
        try:
            booking = self.repository.get_for_company(booking_id, company_id)
            with self.transaction():
                booking.complete(at=now or utc_now())
                self.repository.update(booking)

            self._log_operation("Booking completed", booking.id, {"company_id": str(company_id)})
            return ServiceResult.success(
                BookingResponse.model_validate(booking),
                message="Booking completed successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "complete booking", booking_id)
