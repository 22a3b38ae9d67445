"""
User booking endpoints: checkout, quotes, history, cancellation and rating.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from travel_booking.api.errors import unwrap
from travel_booking.dependencies import (
    get_booking_service,
    get_cancellation_service,
    get_current_user_id,
    get_review_service,
)
from travel_booking.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingListItem,
    BookingResponse,
    PriceQuote,
)
from travel_booking.schemas.review import RatingResult, RatingSubmission
from travel_booking.services.booking import BookingCancellationService, BookingService
from travel_booking.services.review import ReviewService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/quote", response_model=PriceQuote)
def quote_booking(
    payload: BookingCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> PriceQuote:
    """Price a stay before checking out."""
    return unwrap(service.quote_price(payload))


@router.post("", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingDetail:
    """Check out: create a pending booking and return its confirmation code."""
    return unwrap(service.create_booking(user_id, payload))


@router.get("", response_model=List[BookingListItem])
def list_my_bookings(
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> List[BookingListItem]:
    return unwrap(service.list_user_bookings(user_id))


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> BookingDetail:
    return unwrap(service.get_booking(booking_id, user_id))


@router.delete("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    service: BookingCancellationService = Depends(get_cancellation_service),
) -> BookingResponse:
    """Cancel within the grace window after booking."""
    return unwrap(service.cancel_booking(booking_id, user_id))


@router.post("/{booking_id}/rate", response_model=RatingResult, status_code=status.HTTP_201_CREATED)
def rate_booking(
    booking_id: UUID,
    payload: RatingSubmission,
    user_id: UUID = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
) -> RatingResult:
    """Rate a completed trip once it has ended."""
    return unwrap(service.submit_rating(booking_id, user_id, payload))
