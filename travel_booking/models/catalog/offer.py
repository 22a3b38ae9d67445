"""
Offer listing: a time-limited deal.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_booking.models.base import BaseModel, TimestampMixin, UUIDMixin
from travel_booking.models.catalog.offerable import OfferableMixin

__all__ = ["Offer"]


class Offer(UUIDMixin, OfferableMixin, TimestampMixin, BaseModel):
    """A time-limited deal; expired offers are not bookable."""

    __tablename__ = "offers"

    destination_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("destinations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    discount_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<Offer(id={self.id}, title={self.title!r})>"
