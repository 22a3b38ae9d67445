"""
Booking response schemas.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from travel_booking.models.base import BookingStatus, OfferableKind, PaymentMethod
from travel_booking.schemas.common.base import BaseResponseSchema, BaseSchema
from travel_booking.schemas.review.review_submission import ReviewResponse

__all__ = [
    "OfferableSummary",
    "BookingResponse",
    "BookingDetail",
    "BookingListItem",
    "PriceQuote",
    "CompanyBookingStatistics",
]


class OfferableSummary(BaseSchema):
    """Compact view of the booked listing."""

    id: UUID
    title: str
    location: Optional[str] = None
    price: Decimal
    discount_price: Optional[Decimal] = None
    rating: Optional[Decimal] = None


class BookingResponse(BaseResponseSchema):
    """Booking as returned after checkout or a status change."""

    user_id: UUID
    company_id: UUID
    destination_id: Optional[UUID] = None
    package_id: Optional[UUID] = None
    offer_id: Optional[UUID] = None
    check_in: Date
    check_out: Date
    nights: int = Field(..., description="Nights between check-in and check-out")
    guests: int
    total_price: Decimal = Field(..., description="Total price, two decimal places")
    payment_method: PaymentMethod
    status: BookingStatus
    notes: Optional[str] = None
    confirmation_code: str
    updated_at: datetime
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class BookingDetail(BookingResponse):
    """Booking with its listing and review."""

    offerable: Optional[OfferableSummary] = None
    review: Optional[ReviewResponse] = None


class BookingListItem(BookingDetail):
    """Entry in the user's booking history."""

    can_cancel: bool = Field(False, description="Whether the owner can still cancel (status and time window)")
    can_rate: bool = Field(False, description="Whether a rating could be submitted now")


class PriceQuote(BaseSchema):
    """Price preview for a checkout request."""

    offerable_type: OfferableKind
    offerable_id: UUID
    unit_price: Decimal = Field(..., description="Discount price if set, else list price")
    nights: int = Field(..., description="Billable nights, at least one")
    guests: int
    total_price: Decimal
    currency: str


class CompanyBookingStatistics(BaseSchema):
    """Dashboard figures for a company's bookings."""

    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    cancelled_bookings: int
    completed_bookings: int
    total_revenue: Decimal = Field(..., description="Sum of confirmed booking totals")
    currency: str
