"""
Package listing: a curated trip, optionally tied to a destination.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from travel_booking.models.base import BaseModel, TimestampMixin, UUIDMixin
from travel_booking.models.catalog.offerable import OfferableMixin

__all__ = ["Package"]


class Package(UUIDMixin, OfferableMixin, TimestampMixin, BaseModel):
    """A bookable travel package with an optional validity period."""

    __tablename__ = "packages"

    destination_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("destinations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, title={self.title!r})>"
