"""
Destination listing.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_booking.models.base import BaseModel, TimestampMixin, UUIDMixin
from travel_booking.models.catalog.offerable import OfferableMixin

__all__ = ["Destination"]


class Destination(UUIDMixin, OfferableMixin, TimestampMixin, BaseModel):
    """A place users can book directly."""

    __tablename__ = "destinations"

    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Destination(id={self.id}, title={self.title!r})>"
