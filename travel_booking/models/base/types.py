"""
Value types used across models, repositories and schemas.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from travel_booking.models.base.enums import OfferableKind


@dataclass(frozen=True)
class OfferableRef:
    """
    Tagged reference to exactly one catalog listing.

    Replaces the three mutually exclusive ``*_id`` columns at every seam
    above the table layer.
    """

    kind: OfferableKind
    id: UUID

    @property
    def column_name(self) -> str:
        """Name of the booking foreign key column for this kind."""
        return f"{self.kind.value}_id"

    @classmethod
    def from_columns(
        cls,
        destination_id: Optional[UUID] = None,
        package_id: Optional[UUID] = None,
        offer_id: Optional[UUID] = None,
    ) -> Optional["OfferableRef"]:
        """Build a reference from column values, first set column wins."""
        if destination_id is not None:
            return cls(OfferableKind.DESTINATION, destination_id)
        if package_id is not None:
            return cls(OfferableKind.PACKAGE, package_id)
        if offer_id is not None:
            return cls(OfferableKind.OFFER, offer_id)
        return None

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"
