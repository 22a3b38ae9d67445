from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from travel_booking.core.exceptions import BookingNotFoundError, DatabaseError, DuplicateEntryError, ErrorCode
from travel_booking.models import Booking, BookingStatus
from travel_booking.repositories.booking import BookingRepository


def _booking(destination, user_id, **overrides):
    values = {
        "user_id": user_id,
        "company_id": destination.company_id,
        "destination_id": destination.id,
        "check_in": date(2025, 6, 1),
        "check_out": date(2025, 6, 4),
        "guests": 2,
        "total_price": Decimal("300.00"),
        "status": BookingStatus.PENDING,
    }
    values.update(overrides)
    return Booking(**values)


def test_duplicate_confirmation_code_is_a_duplicate_entry(db_session, user_id, make_booking, make_offerable):
    existing = make_booking()
    repository = BookingRepository(db_session)

    with pytest.raises(DuplicateEntryError) as exc_info:
        repository.create(
            _booking(make_offerable(), user_id, confirmation_code=existing.confirmation_code)
        )

    assert exc_info.value.error_code == ErrorCode.ALREADY_EXISTS
    assert exc_info.value.status_code == 409


def test_check_constraint_failure_is_not_reported_as_duplicate(db_session, user_id, make_offerable):
    repository = BookingRepository(db_session)
    same_day = date(2025, 6, 1)

    with pytest.raises(DatabaseError) as exc_info:
        repository.create(
            _booking(make_offerable(), user_id, check_in=same_day, check_out=same_day, confirmation_code="SAMEDAY00001")
        )

    assert not isinstance(exc_info.value, DuplicateEntryError)
    assert exc_info.value.error_code == ErrorCode.DATABASE_ERROR
    assert exc_info.value.status_code == 500


def test_get_for_company_hides_other_companies_bookings(db_session, make_booking):
    booking = make_booking()
    repository = BookingRepository(db_session)

    assert repository.get_for_company(booking.id, booking.company_id) is booking
    with pytest.raises(BookingNotFoundError):
        repository.get_for_company(booking.id, uuid4())


def test_get_by_id_raises_booking_not_found(db_session):
    with pytest.raises(BookingNotFoundError) as exc_info:
        BookingRepository(db_session).get_by_id(uuid4())

    assert exc_info.value.status_code == 404


def test_update_applies_fields_and_flushes(db_session, make_booking):
    booking = make_booking()
    repository = BookingRepository(db_session)

    repository.update(booking, {"notes": "Window seat"})
    db_session.commit()
    db_session.expire_all()

    assert repository.get_by_id(booking.id).notes == "Window seat"


def test_update_rejects_unknown_fields(db_session, make_booking):
    booking = make_booking()

    with pytest.raises(AttributeError):
        BookingRepository(db_session).update(booking, {"no_such_column": 1})
