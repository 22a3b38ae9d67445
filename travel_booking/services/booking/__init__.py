"""
Booking services.
"""

from travel_booking.services.booking.booking_approval_service import BookingApprovalService
from travel_booking.services.booking.booking_cancellation_service import BookingCancellationService
from travel_booking.services.booking.booking_pricing_service import BookingPricingService, PriceBreakdown
from travel_booking.services.booking.booking_service import BookingService

__all__ = [
    "BookingService",
    "BookingPricingService",
    "PriceBreakdown",
    "BookingCancellationService",
    "BookingApprovalService",
]
