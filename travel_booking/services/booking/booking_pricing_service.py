"""
Booking pricing service.

Computes the price of a stay from a listing's unit price, the party size
and the number of nights. Pure calculation; nothing is read or written.
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Protocol

from travel_booking.config.settings import settings

MONEY_QUANTUM = Decimal("0.01")
# Largest amount a Numeric(10, 2) column holds
MAX_TOTAL_PRICE = Decimal("99999999.99")


class Priced(Protocol):
    price: Decimal
    discount_price: Optional[Decimal]


@dataclass(frozen=True)
class PriceBreakdown:
    """Result of a price calculation."""

    unit_price: Decimal
    nights: int
    guests: int
    total_price: Decimal
    currency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_price": str(self.unit_price),
            "nights": self.nights,
            "guests": self.guests,
            "total_price": str(self.total_price),
            "currency": self.currency,
        }


class BookingPricingService:
    """
    Service for booking pricing calculations.

    Responsibilities:
    - Pick the effective unit price (discount over list price)
    - Count billable nights, never fewer than one
    - Multiply out the total with two decimal places
    """

    def __init__(self, currency: Optional[str] = None):
        self.currency = currency or settings.CURRENCY

    # ==================== PRICE CALCULATION ====================

    @staticmethod
    def unit_price(offerable: Priced) -> Decimal:
        """Discount price when set, otherwise the list price."""
        if offerable.discount_price is not None:
            return Decimal(offerable.discount_price)
        return Decimal(offerable.price)

    @staticmethod
    def billable_nights(check_in: date, check_out: date) -> int:
        """Whole days between the dates, floored to one."""
        nights = (check_out - check_in).days
        return nights if nights > 0 else 1

    @staticmethod
    def to_money(amount: Decimal) -> Decimal:
        return Decimal(amount).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)

    def calculate(
        self,
        offerable: Priced,
        check_in: date,
        check_out: date,
        guests: int,
    ) -> PriceBreakdown:
        """
        Calculate the total for a stay.

        total = unit_price * guests * max(nights, 1)

        Args:
            offerable: Listing carrying ``price`` and ``discount_price``
            check_in: Arrival date
            check_out: Departure date
            guests: Party size

        Returns:
            PriceBreakdown with the unit price, nights and total
        """
        unit_price = self.unit_price(offerable)
        nights = self.billable_nights(check_in, check_out)
        total = unit_price * guests * nights

        return PriceBreakdown(
            unit_price=self.to_money(unit_price),
            nights=nights,
            guests=guests,
            total_price=self.to_money(total),
            currency=self.currency,
        )
