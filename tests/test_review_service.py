from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from travel_booking.core.exceptions import ErrorCode
from travel_booking.models import BookingStatus, Offer, Package, Review
from travel_booking.services.review import ReviewService

CHECK_OUT = date(2025, 6, 4)
AFTER_TRIP = datetime(2025, 6, 5, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(db_session):
    return ReviewService(db_session)


@pytest.fixture
def completed_booking(make_booking):
    def _make(offerable=None, owner=None):
        return make_booking(
            offerable=offerable,
            status=BookingStatus.COMPLETED,
            check_in=date(2025, 6, 1),
            check_out=CHECK_OUT,
            owner=owner,
        )

    return _make


def test_rating_updates_listing_average(db_session, service, user_id, completed_booking):
    booking = completed_booking()

    result = service.submit_rating(booking.id, user_id, {"rating": 4, "comment": "Lovely"}, now=AFTER_TRIP)

    assert result.is_success, result.error
    assert result.data.review.rating == 4
    assert result.data.review.comment == "Lovely"
    assert result.data.offerable_rating == Decimal("4.0")
    db_session.refresh(booking.destination)
    assert booking.destination.rating == Decimal("4.0")


def test_rating_before_trip_ends_is_too_early(service, user_id, completed_booking):
    booking = completed_booking()

    day_before = service.submit_rating(booking.id, user_id, {"rating": 5}, now=datetime(2025, 6, 3, 23, tzinfo=timezone.utc))
    midnight = service.submit_rating(booking.id, user_id, {"rating": 5}, now=datetime(2025, 6, 4, tzinfo=timezone.utc))

    assert day_before.error.code == ErrorCode.RATING_TOO_EARLY
    assert midnight.error.code == ErrorCode.RATING_TOO_EARLY


def test_rating_just_after_check_out_starts(service, user_id, completed_booking):
    booking = completed_booking()

    result = service.submit_rating(
        booking.id, user_id, {"rating": 5}, now=datetime(2025, 6, 4, 0, 0, 1, tzinfo=timezone.utc)
    )

    assert result.is_success


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.CANCELLED])
def test_only_completed_bookings_can_be_rated(service, user_id, make_booking, status):
    booking = make_booking(status=status, check_out=CHECK_OUT)

    result = service.submit_rating(booking.id, user_id, {"rating": 3}, now=AFTER_TRIP)

    assert result.error.code == ErrorCode.INVALID_STATE


def test_second_rating_is_duplicate(db_session, service, user_id, completed_booking):
    booking = completed_booking()

    first = service.submit_rating(booking.id, user_id, {"rating": 5}, now=AFTER_TRIP)
    second = service.submit_rating(booking.id, user_id, {"rating": 1}, now=AFTER_TRIP)

    assert first.is_success
    assert second.error.code == ErrorCode.ALREADY_EXISTS
    assert db_session.query(Review).filter(Review.booking_id == booking.id).count() == 1
    db_session.refresh(booking.destination)
    assert booking.destination.rating == Decimal("5.0")


@pytest.mark.parametrize(
    "ratings, expected",
    [
        ([5, 4, 4], Decimal("4.3")),
        ([4, 4, 5], Decimal("4.3")),
        ([4, 4, 4, 5], Decimal("4.3")),
        ([5, 4, 4, 4], Decimal("4.3")),
        ([1, 2], Decimal("1.5")),
    ],
)
def test_average_is_rounded_half_up_regardless_of_order(
    db_session, service, user_id, make_offerable, completed_booking, ratings, expected
):
    package = make_offerable(Package)

    for rating in ratings:
        booking = completed_booking(package)
        assert service.submit_rating(booking.id, user_id, {"rating": rating}, now=AFTER_TRIP).is_success

    db_session.refresh(package)
    assert package.rating == expected


def test_reviews_of_other_listings_do_not_count(db_session, service, user_id, make_offerable, completed_booking):
    offer = make_offerable(Offer)
    other = make_offerable(Offer)
    service.submit_rating(completed_booking(other).id, user_id, {"rating": 1}, now=AFTER_TRIP)

    result = service.submit_rating(completed_booking(offer).id, user_id, {"rating": 5}, now=AFTER_TRIP)

    assert result.data.offerable_rating == Decimal("5.0")
    assert result.data.offerable_type.value == "offer"


@pytest.mark.parametrize("payload, field", [({"rating": 0}, "rating"), ({"rating": 6}, "rating"), ({"rating": 4, "comment": "x" * 501}, "comment")])
def test_invalid_submission_is_rejected(service, user_id, completed_booking, payload, field):
    booking = completed_booking()

    result = service.submit_rating(booking.id, user_id, payload, now=AFTER_TRIP)

    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert result.error.field == field


def test_cannot_rate_someone_elses_booking(service, completed_booking):
    booking = completed_booking()

    result = service.submit_rating(booking.id, uuid4(), {"rating": 5}, now=AFTER_TRIP)

    assert result.error.code == ErrorCode.NOT_FOUND


def test_rated_booking_is_no_longer_rateable(db_session, user_id, completed_booking, service):
    from travel_booking.services.booking import BookingService

    booking = completed_booking()
    service.submit_rating(booking.id, user_id, {"rating": 4}, now=AFTER_TRIP)

    item = BookingService(db_session).list_user_bookings(user_id, now=AFTER_TRIP + timedelta(days=1)).data[0]

    assert item.review.rating == 4
    assert not item.can_rate
