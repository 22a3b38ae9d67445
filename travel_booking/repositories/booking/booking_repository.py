"""
Booking repository: persistence, scoped lookups and company statistics.
"""

from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from travel_booking.config.settings import settings
from travel_booking.core.exceptions import BookingNotFoundError, DatabaseError, DuplicateEntryError
from travel_booking.core.logging import get_logger
from travel_booking.models.base import BookingStatus
from travel_booking.models.booking import Booking, generate_confirmation_code
from travel_booking.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)


class BookingStatistics:
    """Booking statistics data structure."""

    def __init__(self):
        self.total_bookings: int = 0
        self.pending_bookings: int = 0
        self.confirmed_bookings: int = 0
        self.cancelled_bookings: int = 0
        self.completed_bookings: int = 0
        self.total_revenue: Decimal = Decimal("0.00")

    @classmethod
    def from_counts(cls, counts: Dict[BookingStatus, int], revenue: Decimal) -> "BookingStatistics":
        stats = cls()
        stats.pending_bookings = counts.get(BookingStatus.PENDING, 0)
        stats.confirmed_bookings = counts.get(BookingStatus.CONFIRMED, 0)
        stats.cancelled_bookings = counts.get(BookingStatus.CANCELLED, 0)
        stats.completed_bookings = counts.get(BookingStatus.COMPLETED, 0)
        stats.total_bookings = sum(counts.values())
        stats.total_revenue = Decimal(revenue).quantize(Decimal("0.01"))
        return stats


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking operations.

    Provides:
    - Creation with a collision-free confirmation code
    - Lookups scoped to the owning user or company
    - Per-company status counts and revenue
    """

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    # ==================== CREATION ====================

    def confirmation_code_exists(self, code: str) -> bool:
        return self.exists({"confirmation_code": code})

    def generate_unique_code(self) -> str:
        """
        Draw confirmation codes until one is unused.

        Raises:
            DuplicateEntryError: If every attempt collided
        """
        for _ in range(settings.CONFIRMATION_CODE_ATTEMPTS):
            code = generate_confirmation_code(settings.CONFIRMATION_CODE_LENGTH)
            if not self.confirmation_code_exists(code):
                return code
            logger.warning("Confirmation code collision, retrying")
        raise DuplicateEntryError(
            "Could not allocate a unique confirmation code",
            details={"attempts": settings.CONFIRMATION_CODE_ATTEMPTS},
        )

    def create_booking(self, booking: Booking) -> Booking:
        """Persist a new booking, assigning its confirmation code."""
        if not booking.confirmation_code:
            booking.confirmation_code = self.generate_unique_code()
        return self.create(booking)

    # ==================== SCOPED RETRIEVAL ====================

    def not_found(self, id: UUID) -> BookingNotFoundError:
        return BookingNotFoundError(str(id))

    def get_for_user(self, booking_id: UUID, user_id: UUID) -> Booking:
        """
        Booking owned by the user.

        Raises:
            BookingNotFoundError: Missing, or owned by someone else
        """
        booking = self.find_by_id(booking_id)
        if booking is None or booking.user_id != user_id:
            raise self.not_found(booking_id)
        return booking

    def get_for_company(self, booking_id: UUID, company_id: UUID) -> Booking:
        """
        Booking for one of the company's listings.

        Raises:
            BookingNotFoundError: Missing, or belonging to another company
        """
        booking = self.find_by_id(booking_id)
        if booking is None or booking.company_id != company_id:
            raise self.not_found(booking_id)
        return booking

    def list_for_user(self, user_id: UUID) -> List[Booking]:
        """User's bookings, newest first, with listings and reviews loaded."""
        stmt = (
            select(Booking)
            .where(Booking.user_id == user_id)
            .options(
                selectinload(Booking.destination),
                selectinload(Booking.package),
                selectinload(Booking.offer),
                selectinload(Booking.reviews),
            )
            .order_by(Booking.created_at.desc())
        )
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Booking listing failed: {str(e)}") from e

    # ==================== ANALYTICS ====================

    def company_statistics(self, company_id: UUID) -> BookingStatistics:
        """Status counts and confirmed revenue for one company."""
        count_stmt = (
            select(Booking.status, func.count(Booking.id))
            .where(Booking.company_id == company_id)
            .group_by(Booking.status)
        )
        revenue_stmt = select(func.coalesce(func.sum(Booking.total_price), 0)).where(
            Booking.company_id == company_id,
            Booking.status == BookingStatus.CONFIRMED,
        )
        try:
            counts = {status: count for status, count in self.db.execute(count_stmt).all()}
            revenue = self.db.scalar(revenue_stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Booking statistics failed: {str(e)}") from e
        return BookingStatistics.from_counts(counts, Decimal(str(revenue)))
