from uuid import uuid4

import pytest

from travel_booking.core.exceptions import ErrorCode, InvalidBookingStateError
from travel_booking.models import Booking, BookingStatus
from travel_booking.services.booking import BookingApprovalService

from .conftest import FIXED_NOW


@pytest.fixture
def service(db_session):
    return BookingApprovalService(db_session)


def test_confirm_pending_booking(service, company_id, make_booking):
    booking = make_booking()

    result = service.confirm_booking(booking.id, company_id, now=FIXED_NOW)

    assert result.is_success
    assert result.data.status == BookingStatus.CONFIRMED
    assert result.data.confirmed_at is not None


def test_confirm_twice_is_invalid(service, company_id, make_booking):
    booking = make_booking(status=BookingStatus.CONFIRMED)

    result = service.confirm_booking(booking.id, company_id)

    assert result.error.code == ErrorCode.INVALID_STATE


def test_complete_requires_confirmation(service, company_id, make_booking):
    pending = make_booking()
    confirmed = make_booking(status=BookingStatus.CONFIRMED)

    assert service.complete_booking(pending.id, company_id).error.code == ErrorCode.INVALID_STATE
    result = service.complete_booking(confirmed.id, company_id, now=FIXED_NOW)
    assert result.data.status == BookingStatus.COMPLETED
    assert result.data.completed_at is not None


def test_other_company_cannot_confirm(service, make_booking):
    booking = make_booking()

    result = service.confirm_booking(booking.id, uuid4())

    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.parametrize(
    "start, target, allowed",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED, True),
        (BookingStatus.PENDING, BookingStatus.CANCELLED, True),
        (BookingStatus.PENDING, BookingStatus.COMPLETED, False),
        (BookingStatus.CONFIRMED, BookingStatus.COMPLETED, True),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED, True),
        (BookingStatus.CONFIRMED, BookingStatus.PENDING, False),
        (BookingStatus.COMPLETED, BookingStatus.CANCELLED, False),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED, False),
    ],
)
def test_transition_table(start, target, allowed):
    assert Booking(status=start).can_transition_to(target) is allowed


def test_illegal_model_transition_raises():
    booking = Booking(status=BookingStatus.CANCELLED)

    with pytest.raises(InvalidBookingStateError):
        booking.complete()
