"""
Booking model for catalog reservations.

A booking references exactly one destination, package or offer, carries
the price computed at checkout and moves through a small status machine.
"""

import secrets
import string
from datetime import date as Date, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from travel_booking.config.settings import settings
from travel_booking.core.exceptions import InvalidBookingStateError
from travel_booking.core.utils import as_utc, start_of_day_utc, utc_now
from travel_booking.models.base import (
    BOOKING_TRANSITIONS,
    BaseModel,
    BookingStatus,
    OfferableRef,
    PaymentMethod,
    TimestampMixin,
    UUIDMixin,
)

if TYPE_CHECKING:
    from travel_booking.models.catalog import Destination, Offer, Offerable, Package
    from travel_booking.models.review.review import Review

__all__ = ["Booking", "generate_confirmation_code"]

CONFIRMATION_CODE_ALPHABET = string.ascii_letters + string.digits


def generate_confirmation_code(length: Optional[int] = None) -> str:
    """Random alphanumeric code shown to the user after checkout."""
    length = length or settings.CONFIRMATION_CODE_LENGTH
    return "".join(secrets.choice(CONFIRMATION_CODE_ALPHABET) for _ in range(length))


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class Booking(UUIDMixin, TimestampMixin, BaseModel):
    """
    Reservation of a catalog listing by a user.

    Attributes:
        user_id: User who made the booking
        company_id: Company owning the booked listing, copied at creation
        destination_id / package_id / offer_id: Exactly one is set
        check_in: First night
        check_out: Departure day, strictly after check_in
        guests: Number of guests
        total_price: Price fixed at checkout
        status: Lifecycle status
        payment_method: Always cash
        notes: Optional guest notes
        confirmation_code: Unique opaque code
        confirmed_at / cancelled_at / completed_at: Transition timestamps
    """

    __tablename__ = "bookings"

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="User making the booking",
    )

    company_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Company owning the booked listing",
    )

    # Listing reference, exactly one is set
    destination_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("destinations.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    package_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("packages.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    offer_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("offers.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Stay
    check_in: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)

    check_out: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    guests: Mapped[int] = mapped_column(Integer, nullable=False)

    # Pricing (precision: 10, scale: 2)
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="unit price x guests x nights, fixed at checkout",
    )

    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(
            PaymentMethod,
            native_enum=False,
            values_callable=_enum_values,
            length=20,
            name="payment_method",
        ),
        nullable=False,
        default=PaymentMethod.CASH,
    )

    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            native_enum=False,
            values_callable=_enum_values,
            length=20,
            name="booking_status",
        ),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    confirmation_code: Mapped[str] = mapped_column(
        String(32),
        unique=True,
        nullable=False,
        index=True,
        comment="Opaque code shown to the user",
    )

    confirmed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    destination: Mapped[Optional["Destination"]] = relationship("Destination", lazy="select")

    package: Mapped[Optional["Package"]] = relationship("Package", lazy="select")

    offer: Mapped[Optional["Offer"]] = relationship("Offer", lazy="select")

    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_booking_user_created", "user_id", "created_at"),
        Index("ix_booking_company_status", "company_id", "status"),
        CheckConstraint(
            "(CASE WHEN destination_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN package_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN offer_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_booking_single_offerable",
        ),
        CheckConstraint("check_out > check_in", name="ck_booking_dates_order"),
        CheckConstraint("guests >= 1", name="ck_booking_guests_positive"),
        CheckConstraint("total_price >= 0", name="ck_booking_total_positive"),
        {"comment": "User reservations of destinations, packages and offers"},
    )

    @validates("guests")
    def validate_guests(self, key: str, value: int) -> int:
        if value < 1:
            raise ValueError("guests must be at least 1")
        return value

    @validates("total_price")
    def validate_total_price(self, key: str, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("total_price cannot be negative")
        return value

    # Properties
    @property
    def offerable_ref(self) -> Optional[OfferableRef]:
        """The booked listing as a tagged reference."""
        return OfferableRef.from_columns(self.destination_id, self.package_id, self.offer_id)

    @property
    def offerable(self) -> Optional["Offerable"]:
        """The booked listing, destination first."""
        return self.destination or self.package or self.offer

    @property
    def review(self) -> Optional["Review"]:
        """The owner's review, if the booking was rated."""
        return self.reviews[0] if self.reviews else None

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def is_cancellable(self) -> bool:
        return self.can_transition_to(BookingStatus.CANCELLED)

    def time_since_created(self, now: datetime) -> timedelta:
        return as_utc(now) - as_utc(self.created_at)

    def within_cancellation_window(self, now: datetime, window_hours: Optional[int] = None) -> bool:
        """Exactly ``window_hours`` after creation still counts as inside."""
        if window_hours is None:
            window_hours = settings.CANCELLATION_WINDOW_HOURS
        return self.time_since_created(now) <= timedelta(hours=window_hours)

    def cancellable_by_owner(self, now: datetime, window_hours: Optional[int] = None) -> bool:
        return self.is_cancellable and self.within_cancellation_window(now, window_hours)

    def trip_ended_by(self, now: datetime) -> bool:
        """True once ``now`` is past the start of the check-out day (UTC)."""
        return as_utc(now) > start_of_day_utc(self.check_out)

    # Transitions
    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in BOOKING_TRANSITIONS.get(self.status, frozenset())

    def _transition(self, target: BookingStatus) -> None:
        if not self.can_transition_to(target):
            allowed = [
                status.value
                for status, targets in BOOKING_TRANSITIONS.items()
                if target in targets
            ]
            raise InvalidBookingStateError(
                f"Cannot move booking from {self.status.value} to {target.value}",
                booking_id=str(self.id),
                current_status=self.status.value,
                allowed_statuses=allowed,
            )
        self.status = target

    def confirm(self, at: Optional[datetime] = None) -> None:
        """Company accepts the booking."""
        self._transition(BookingStatus.CONFIRMED)
        self.confirmed_at = at or utc_now()

    def cancel(self, at: Optional[datetime] = None) -> None:
        """Cancel a pending or confirmed booking."""
        self._transition(BookingStatus.CANCELLED)
        self.cancelled_at = at or utc_now()

    def complete(self, at: Optional[datetime] = None) -> None:
        """Mark a confirmed booking as completed once the trip is over."""
        self._transition(BookingStatus.COMPLETED)
        self.completed_at = at or utc_now()

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, code={self.confirmation_code}, "
            f"status={self.status}, offerable={self.offerable_ref})>"
        )


# Event Listeners
@event.listens_for(Booking, "before_insert")
def ensure_confirmation_code(mapper, connection, target):
    """Fill in a confirmation code when the caller did not provide one."""
    if not target.confirmation_code:
        target.confirmation_code = generate_confirmation_code()
