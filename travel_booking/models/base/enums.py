"""
Enumerations shared by the ORM models.
"""

import enum
from typing import Dict, FrozenSet


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class OfferableKind(str, enum.Enum):
    """Kinds of catalog listings a booking or review can reference."""
    DESTINATION = "destination"
    PACKAGE = "package"
    OFFER = "offer"


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods."""
    CASH = "cash"


# pending -> confirmed -> completed; pending/confirmed -> cancelled
BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


__all__ = [
    "BookingStatus",
    "OfferableKind",
    "PaymentMethod",
    "BOOKING_TRANSITIONS",
]
