"""
SQLAlchemy models for the travel booking service.

Importing this package registers every table on ``Base.metadata``.
"""

from travel_booking.models.base import (
    BOOKING_TRANSITIONS,
    Base,
    BaseModel,
    BookingStatus,
    OfferableKind,
    OfferableRef,
    PaymentMethod,
)
from travel_booking.models.catalog import (
    OFFERABLE_MODELS,
    Destination,
    Offer,
    Offerable,
    Package,
)
from travel_booking.models.booking import Booking
from travel_booking.models.review import Review

__all__ = [
    "Base",
    "BaseModel",
    "BookingStatus",
    "OfferableKind",
    "OfferableRef",
    "PaymentMethod",
    "BOOKING_TRANSITIONS",
    "Destination",
    "Package",
    "Offer",
    "Offerable",
    "OFFERABLE_MODELS",
    "Booking",
    "Review",
]
