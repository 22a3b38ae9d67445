"""
Business services. Each returns a ``ServiceResult`` instead of raising.
"""

from travel_booking.services.base import BaseService, ErrorSeverity, ServiceError, ServiceResult
from travel_booking.services.booking import (
    BookingApprovalService,
    BookingCancellationService,
    BookingPricingService,
    BookingService,
)
from travel_booking.services.review import ReviewService

__all__ = [
    "BaseService",
    "ServiceResult",
    "ServiceError",
    "ErrorSeverity",
    "BookingService",
    "BookingPricingService",
    "BookingCancellationService",
    "BookingApprovalService",
    "ReviewService",
]
