"""
Booking request schemas for checkout and price quotes.

A request names exactly one listing (destination, package or offer), the
stay dates and the party size.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator, model_validator

from travel_booking.config.settings import settings
from travel_booking.models.base import OfferableRef
from travel_booking.schemas.common.base import BaseCreateSchema

__all__ = [
    "BookingCreate",
    "OFFERABLE_FIELDS",
]

OFFERABLE_FIELDS = ("destination_id", "package_id", "offer_id")


class BookingCreate(BaseCreateSchema):
    """
    Checkout request.

    Exactly one of ``destination_id``, ``package_id`` and ``offer_id`` must
    be given. ``check_in`` not being in the past is checked by the service
    against its clock.
    """

    destination_id: Optional[UUID] = Field(
        None,
        description="Destination being booked",
    )
    package_id: Optional[UUID] = Field(
        None,
        description="Package being booked",
    )
    offer_id: Optional[UUID] = Field(
        None,
        description="Offer being booked",
    )

    check_in: Date = Field(
        ...,
        description="Arrival date (YYYY-MM-DD)",
    )
    check_out: Date = Field(
        ...,
        description="Departure date, after check_in (YYYY-MM-DD)",
    )
    guests: int = Field(
        ...,
        ge=settings.MIN_GUESTS_PER_BOOKING,
        le=settings.MAX_GUESTS_PER_BOOKING,
        description="Number of guests",
    )
    notes: Optional[str] = Field(
        None,
        max_length=settings.NOTES_MAX_LENGTH,
        description="Optional notes for the provider",
    )

    @field_validator("check_out")
    @classmethod
    def validate_check_out(cls, v: Date, info: ValidationInfo) -> Date:
        """Check-out must fall strictly after check-in, within the maximum stay."""
        check_in = info.data.get("check_in")
        if check_in is None:
            return v
        if v <= check_in:
            raise ValueError("Check-out date must be after check-in date")
        if (v - check_in).days > settings.MAX_STAY_NIGHTS:
            raise ValueError(f"Stay cannot exceed {settings.MAX_STAY_NIGHTS} nights")
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def validate_single_offerable(self) -> "BookingCreate":
        """Exactly one listing reference may be set."""
        provided = [name for name in OFFERABLE_FIELDS if getattr(self, name) is not None]
        if not provided:
            raise ValueError("One of destination_id, package_id or offer_id is required")
        if len(provided) > 1:
            raise ValueError(
                f"Only one of destination_id, package_id or offer_id may be set (got {', '.join(provided)})"
            )
        return self

    @property
    def offerable(self) -> OfferableRef:
        """The selected listing as a tagged reference."""
        return OfferableRef.from_columns(self.destination_id, self.package_id, self.offer_id)
