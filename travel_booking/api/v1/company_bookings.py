"""
Company dashboard endpoints for bookings of the company's listings.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from travel_booking.api.errors import unwrap
from travel_booking.dependencies import (
    get_approval_service,
    get_booking_service,
    get_cancellation_service,
    get_current_company_id,
)
from travel_booking.schemas.booking import BookingResponse, CompanyBookingStatistics
from travel_booking.services.booking import (
    BookingApprovalService,
    BookingCancellationService,
    BookingService,
)

router = APIRouter(prefix="/company/bookings", tags=["Company Bookings"])


@router.get("/statistics", response_model=CompanyBookingStatistics)
def booking_statistics(
    company_id: UUID = Depends(get_current_company_id),
    service: BookingService = Depends(get_booking_service),
) -> CompanyBookingStatistics:
    return unwrap(service.get_company_statistics(company_id))


@router.patch("/{booking_id}/confirm", response_model=BookingResponse)
def confirm_booking(
    booking_id: UUID,
    company_id: UUID = Depends(get_current_company_id),
    service: BookingApprovalService = Depends(get_approval_service),
) -> BookingResponse:
    return unwrap(service.confirm_booking(booking_id, company_id))


@router.patch("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
    booking_id: UUID,
    company_id: UUID = Depends(get_current_company_id),
    service: BookingApprovalService = Depends(get_approval_service),
) -> BookingResponse:
    return unwrap(service.complete_booking(booking_id, company_id))


@router.delete("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: UUID,
    company_id: UUID = Depends(get_current_company_id),
    service: BookingCancellationService = Depends(get_cancellation_service),
) -> BookingResponse:
    """Company cancellation; no time window applies."""
    return unwrap(service.cancel_company_booking(booking_id, company_id))
