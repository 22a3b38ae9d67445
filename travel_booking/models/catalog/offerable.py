"""
Shared columns and behaviour for bookable catalog listings.

Destinations, packages and offers are priced and rated the same way;
they differ only in presentation fields and validity dates.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, validates


class OfferableMixin:
    """
    Pricing, ownership and rating fields common to every listing.

    Attributes:
        company_id: Owning company
        title: Display title
        location: Free-text location
        price: List price per guest per night
        discount_price: Optional reduced price, strictly below ``price``
        rating: Mean review rating rounded to one decimal
        is_active: Whether the listing accepts bookings
    """

    company_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Company that owns the listing",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Price per guest per night",
    )

    discount_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Reduced price, preferred over price when set",
    )

    rating: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(2, 1),
        nullable=True,
        comment="Average review rating (1.0 - 5.0)",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    @declared_attr.directive
    def __table_args__(cls):
        table = cls.__tablename__
        return (
            CheckConstraint("price > 0", name=f"ck_{table}_price_positive"),
            CheckConstraint(
                "discount_price IS NULL OR (discount_price >= 0 AND discount_price < price)",
                name=f"ck_{table}_discount_below_price",
            ),
            CheckConstraint(
                "rating IS NULL OR (rating >= 1 AND rating <= 5)",
                name=f"ck_{table}_rating_range",
            ),
            Index(f"ix_{table}_company_active", "company_id", "is_active"),
        )

    @validates("price", "discount_price")
    def validate_amounts(self, key: str, value: Optional[Decimal]) -> Optional[Decimal]:
        """Reject negative amounts early; cross-field rules live in the table."""
        if value is not None and Decimal(value) < 0:
            raise ValueError(f"{key} cannot be negative")
        return value

    def is_bookable_on(self, day: date) -> bool:
        """Active, and not past its end date when it has one."""
        if not self.is_active:
            return False
        end_date = getattr(self, "end_date", None)
        return end_date is None or end_date >= day
