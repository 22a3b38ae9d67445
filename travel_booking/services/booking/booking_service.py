"""
Core booking service: checkout, price quotes, detail/list queries and
company statistics.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session

from travel_booking.config.settings import settings
from travel_booking.core.exceptions import ValidationError
from travel_booking.core.logging import track_performance
from travel_booking.core.utils import utc_now
from travel_booking.models.base import BookingStatus, OfferableRef, PaymentMethod
from travel_booking.models.booking import Booking
from travel_booking.models.catalog import Offerable
from travel_booking.repositories.booking import BookingRepository
from travel_booking.repositories.catalog import CatalogRepository
from travel_booking.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingListItem,
    CompanyBookingStatistics,
    PriceQuote,
)
from travel_booking.services.base import BaseService, ServiceResult
from travel_booking.services.booking.booking_pricing_service import (
    MAX_TOTAL_PRICE,
    BookingPricingService,
    PriceBreakdown,
)

BookingInput = Union[BookingCreate, Dict[str, Any]]


class BookingService(BaseService[Booking, BookingRepository]):
    """
    Create and query bookings.

    Checkout resolves the single referenced listing, prices the stay and
    stores a pending booking with a fresh confirmation code.
    """

    def __init__(
        self,
        db_session: Session,
        repository: Optional[BookingRepository] = None,
        catalog_repository: Optional[CatalogRepository] = None,
        pricing_service: Optional[BookingPricingService] = None,
    ):
        super().__init__(repository or BookingRepository(db_session), db_session)
        self.catalog = catalog_repository or CatalogRepository(db_session)
        self.pricing = pricing_service or BookingPricingService()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_stay(self, request: BookingCreate, today: date) -> None:
        if request.check_in < today:
            raise ValidationError(
                "Check-in date cannot be in the past",
                {"check_in": [f"Check-in date must be on or after {today.isoformat()}"]},
            )

    def _resolve_offerable(self, ref: OfferableRef, today: date) -> Offerable:
        """
        Load the listing and make sure it can be booked today.

        Raises:
            OfferableNotFoundError: If the listing does not exist
            ValidationError: If it is inactive or past its end date
        """
        offerable = self.catalog.get_offerable(ref)
        if not offerable.is_bookable_on(today):
            raise ValidationError(
                f"This {ref.kind.value} is no longer available",
                {ref.column_name: [f"The selected {ref.kind.value} is inactive or expired"]},
            )
        return offerable

    def _price(self, data: BookingInput, today: date):
        request = self._parse(BookingCreate, data, root_field="offerable")
        self._validate_stay(request, today)
        offerable = self._resolve_offerable(request.offerable, today)
        breakdown = self.pricing.calculate(
            offerable, request.check_in, request.check_out, request.guests
        )
        if breakdown.total_price > MAX_TOTAL_PRICE:
            raise ValidationError(
                "Booking total exceeds the supported amount",
                {"total_price": [f"Total must not exceed {MAX_TOTAL_PRICE}"]},
            )
        return request, offerable, breakdown

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(
        self,
        user_id: UUID,
        data: BookingInput,
        today: Optional[date] = None,
    ) -> ServiceResult[BookingDetail]:
        """
        Create a pending booking for the user.

        Args:
            user_id: Booking user
            data: Checkout request
            today: Reference date for the check-in rule (defaults to UTC today)

        Returns:
            ServiceResult containing BookingDetail or error
        """
        today = today or utc_now().date()
        try:
            request, offerable, breakdown = self._price(data, today)
            ref = request.offerable

            self._logger.info(
                f"Creating booking for {ref}",
                extra={
                    "offerable": str(ref),
                    "booking_user": str(user_id),
                    **breakdown.to_dict(),
                },
            )

            with self.transaction():
                booking = Booking(
                    user_id=user_id,
                    company_id=offerable.company_id,
                    check_in=request.check_in,
                    check_out=request.check_out,
                    guests=request.guests,
                    total_price=breakdown.total_price,
                    status=BookingStatus.PENDING,
                    payment_method=PaymentMethod(settings.DEFAULT_PAYMENT_METHOD),
                    notes=request.notes,
                )
                setattr(booking, ref.column_name, ref.id)
                self.repository.create_booking(booking)

            self._log_operation(
                "Booking created",
                booking.id,
                {"confirmation_code": booking.confirmation_code, "total_price": str(booking.total_price)},
            )
            return ServiceResult.success(
                BookingDetail.model_validate(booking),
                message="Booking created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create booking")

    @track_performance("quote_price")
    def quote_price(
        self,
        data: BookingInput,
        today: Optional[date] = None,
    ) -> ServiceResult[PriceQuote]:
        """Price a checkout request without storing anything."""
        today = today or utc_now().date()
        try:
            request, _, breakdown = self._price(data, today)
            return ServiceResult.success(self._to_quote(request.offerable, breakdown))
        except Exception as e:
            return self._handle_exception(e, "quote booking price")

    @staticmethod
    def _to_quote(ref: OfferableRef, breakdown: PriceBreakdown) -> PriceQuote:
        return PriceQuote(
            offerable_type=ref.kind,
            offerable_id=ref.id,
            unit_price=breakdown.unit_price,
            nights=breakdown.nights,
            guests=breakdown.guests,
            total_price=breakdown.total_price,
            currency=breakdown.currency,
        )

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: UUID, user_id: UUID) -> ServiceResult[BookingDetail]:
        """Owner-scoped booking detail."""
        try:
            booking = self.repository.get_for_user(booking_id, user_id)
            return ServiceResult.success(BookingDetail.model_validate(booking))
        except Exception as e:
            return self._handle_exception(e, "get booking detail", booking_id)

    @track_performance("list_user_bookings")
    def list_user_bookings(
        self,
        user_id: UUID,
        now: Optional[datetime] = None,
    ) -> ServiceResult[List[BookingListItem]]:
        """The user's bookings, newest first, flagged with what they can still do."""
        now = now or utc_now()
        try:
            items = []
            for booking in self.repository.list_for_user(user_id):
                item = BookingListItem.model_validate(booking)
                items.append(
                    item.model_copy(
                        update={
                            "can_cancel": booking.cancellable_by_owner(now),
                            "can_rate": booking.review is None
                            and booking.status == BookingStatus.COMPLETED
                            and booking.trip_ended_by(now),
                        }
                    )
                )
            return ServiceResult.success(items, metadata={"total": len(items)})
        except Exception as e:
            return self._handle_exception(e, "list user bookings", user_id)

    def get_company_statistics(self, company_id: UUID) -> ServiceResult[CompanyBookingStatistics]:
        """Status counts and confirmed revenue for the company dashboard."""
        try:
            stats = self.repository.company_statistics(company_id)
            return ServiceResult.success(
                CompanyBookingStatistics(
                    total_bookings=stats.total_bookings,
                    pending_bookings=stats.pending_bookings,
                    confirmed_bookings=stats.confirmed_bookings,
                    cancelled_bookings=stats.cancelled_bookings,
                    completed_bookings=stats.completed_bookings,
                    total_revenue=stats.total_revenue,
                    currency=self.pricing.currency,
                )
            )
        except Exception as e:
            return self._handle_exception(e, "get company booking statistics", company_id)
