"""
Booking schemas.
"""

from travel_booking.schemas.booking.booking_request import OFFERABLE_FIELDS, BookingCreate
from travel_booking.schemas.booking.booking_response import (
    BookingDetail,
    BookingListItem,
    BookingResponse,
    CompanyBookingStatistics,
    OfferableSummary,
    PriceQuote,
)

__all__ = [
    "BookingCreate",
    "OFFERABLE_FIELDS",
    "BookingResponse",
    "BookingDetail",
    "BookingListItem",
    "OfferableSummary",
    "PriceQuote",
    "CompanyBookingStatistics",
]
