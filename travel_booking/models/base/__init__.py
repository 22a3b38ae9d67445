"""
Base model package: declarative base, mixins, enums and value types.
"""

from travel_booking.models.base.base_model import Base, BaseModel
from travel_booking.models.base.enums import (
    BOOKING_TRANSITIONS,
    BookingStatus,
    OfferableKind,
    PaymentMethod,
)
from travel_booking.models.base.mixins import TimestampMixin, UUIDMixin
from travel_booking.models.base.types import OfferableRef

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "BookingStatus",
    "OfferableKind",
    "PaymentMethod",
    "BOOKING_TRANSITIONS",
    "OfferableRef",
]
