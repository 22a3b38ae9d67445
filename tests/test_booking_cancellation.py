from datetime import timedelta
from uuid import uuid4

import pytest

from travel_booking.core.exceptions import ErrorCode
from travel_booking.models import BookingStatus
from travel_booking.services.booking import BookingCancellationService

from .conftest import FIXED_NOW


@pytest.fixture
def service(db_session):
    return BookingCancellationService(db_session)


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
def test_cancel_within_window(service, user_id, make_booking, status):
    booking = make_booking(status=status, created_at=FIXED_NOW)

    result = service.cancel_booking(booking.id, user_id, now=FIXED_NOW + timedelta(hours=1))

    assert result.is_success, result.error
    assert result.data.status == BookingStatus.CANCELLED
    assert result.data.cancelled_at is not None


def test_cancel_at_exactly_twelve_hours(service, user_id, make_booking):
    booking = make_booking(created_at=FIXED_NOW)

    result = service.cancel_booking(booking.id, user_id, now=FIXED_NOW + timedelta(hours=12))

    assert result.is_success


def test_cancel_after_thirteen_hours_is_expired(db_session, service, user_id, make_booking):
    booking = make_booking(created_at=FIXED_NOW - timedelta(hours=13))

    result = service.cancel_booking(booking.id, user_id, now=FIXED_NOW)

    assert result.error.code == ErrorCode.CANCELLATION_WINDOW_EXPIRED
    assert result.error.details["window_hours"] == 12
    db_session.refresh(booking)
    assert booking.status == BookingStatus.PENDING


@pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.CANCELLED])
def test_cancel_in_final_status_is_invalid(service, user_id, make_booking, status):
    booking = make_booking(status=status)

    result = service.cancel_booking(booking.id, user_id, now=FIXED_NOW)

    assert result.error.code == ErrorCode.INVALID_STATE
    assert result.error.details["current_status"] == status.value


def test_second_cancel_is_invalid_state(service, user_id, make_booking):
    booking = make_booking()

    first = service.cancel_booking(booking.id, user_id, now=FIXED_NOW)
    second = service.cancel_booking(booking.id, user_id, now=FIXED_NOW)

    assert first.is_success
    assert second.error.code == ErrorCode.INVALID_STATE


def test_state_is_checked_before_window(service, user_id, make_booking):
    booking = make_booking(status=BookingStatus.COMPLETED, created_at=FIXED_NOW - timedelta(days=3))

    result = service.cancel_booking(booking.id, user_id, now=FIXED_NOW)

    assert result.error.code == ErrorCode.INVALID_STATE


def test_cannot_cancel_someone_elses_booking(service, make_booking):
    booking = make_booking()

    result = service.cancel_booking(booking.id, uuid4(), now=FIXED_NOW)

    assert result.error.code == ErrorCode.NOT_FOUND


def test_company_cancel_has_no_window(service, company_id, make_booking):
    booking = make_booking(status=BookingStatus.CONFIRMED, created_at=FIXED_NOW - timedelta(days=10))

    result = service.cancel_company_booking(booking.id, company_id, now=FIXED_NOW)

    assert result.is_success
    assert result.data.status == BookingStatus.CANCELLED


def test_company_cancel_requires_ownership_and_state(service, company_id, make_booking):
    booking = make_booking(status=BookingStatus.COMPLETED)

    wrong_company = service.cancel_company_booking(booking.id, uuid4(), now=FIXED_NOW)
    completed = service.cancel_company_booking(booking.id, company_id, now=FIXED_NOW)

    assert wrong_company.error.code == ErrorCode.NOT_FOUND
    assert completed.error.code == ErrorCode.INVALID_STATE
