from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from travel_booking.models import BookingStatus

API = "/api/v1"


def _headers(user_id=None, company_id=None):
    headers = {}
    if user_id:
        headers["X-User-Id"] = str(user_id)
    if company_id:
        headers["X-Company-Id"] = str(company_id)
    return headers


def _future_stay(days_ahead=30, nights=3):
    check_in = date.today() + timedelta(days=days_ahead)
    return {"check_in": check_in.isoformat(), "check_out": (check_in + timedelta(days=nights)).isoformat()}


def test_create_booking_returns_201(client, user_id, make_offerable):
    destination = make_offerable(price=Decimal("100.00"), discount_price=Decimal("80.00"))
    payload = {"destination_id": str(destination.id), "guests": 2, **_future_stay()}

    response = client.post(f"{API}/bookings", json=payload, headers=_headers(user_id))

    assert response.status_code == 201, response.json()
    body = response.json()
    assert body["status"] == "pending"
    assert body["payment_method"] == "cash"
    assert Decimal(body["total_price"]) == Decimal("480.00")
    assert len(body["confirmation_code"]) == 12
    assert response.headers["X-Request-ID"]


def test_quote_endpoint(client, user_id, make_offerable):
    destination = make_offerable(price=Decimal("50.00"))
    payload = {"destination_id": str(destination.id), "guests": 3, **_future_stay(nights=2)}

    response = client.post(f"{API}/bookings/quote", json=payload, headers=_headers(user_id))

    assert response.status_code == 200
    assert Decimal(response.json()["total_price"]) == Decimal("300.00")


def test_missing_reference_returns_422_error_body(client, user_id):
    response = client.post(f"{API}/bookings", json={"guests": 2, **_future_stay()}, headers=_headers(user_id))

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "field_errors" in error["details"]


def test_unknown_listing_returns_404(client, user_id):
    payload = {"package_id": str(uuid4()), "guests": 2, **_future_stay()}

    response = client.post(f"{API}/bookings", json=payload, headers=_headers(user_id))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_missing_identity_returns_401(client):
    response = client.get(f"{API}/bookings")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_list_and_detail(client, user_id, make_booking):
    booking = make_booking()

    listing = client.get(f"{API}/bookings", headers=_headers(user_id))
    detail = client.get(f"{API}/bookings/{booking.id}", headers=_headers(user_id))
    foreign = client.get(f"{API}/bookings/{booking.id}", headers=_headers(uuid4()))

    assert [item["id"] for item in listing.json()] == [str(booking.id)]
    assert detail.json()["confirmation_code"] == booking.confirmation_code
    assert detail.json()["offerable"]["id"] == str(booking.destination_id)
    assert foreign.status_code == 404


def test_cancel_then_cancel_again(client, user_id, make_offerable):
    destination = make_offerable()
    created = client.post(
        f"{API}/bookings",
        json={"destination_id": str(destination.id), "guests": 1, **_future_stay()},
        headers=_headers(user_id),
    ).json()

    first = client.delete(f"{API}/bookings/{created['id']}/cancel", headers=_headers(user_id))
    second = client.delete(f"{API}/bookings/{created['id']}/cancel", headers=_headers(user_id))

    assert first.status_code == 200
    assert first.json()["status"] == "cancelled"
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "INVALID_STATE"


def test_rating_before_check_out_returns_403(client, user_id, make_booking):
    check_in = date.today() + timedelta(days=5)
    booking = make_booking(status=BookingStatus.COMPLETED, check_in=check_in, check_out=check_in + timedelta(days=2))

    response = client.post(f"{API}/bookings/{booking.id}/rate", json={"rating": 5}, headers=_headers(user_id))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "RATING_TOO_EARLY"


def test_rating_and_duplicate(client, user_id, make_booking):
    booking = make_booking(
        status=BookingStatus.COMPLETED,
        check_in=date.today() - timedelta(days=5),
        check_out=date.today() - timedelta(days=2),
    )
    url = f"{API}/bookings/{booking.id}/rate"

    first = client.post(url, json={"rating": 4, "comment": "Great"}, headers=_headers(user_id))
    second = client.post(url, json={"rating": 4}, headers=_headers(user_id))

    assert first.status_code == 201
    assert Decimal(first.json()["offerable_rating"]) == Decimal("4.0")
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ALREADY_EXISTS"


def test_company_confirm_complete_and_statistics(client, company_id, make_booking):
    booking = make_booking()
    base = f"{API}/company/bookings/{booking.id}"

    confirmed = client.patch(f"{base}/confirm", headers=_headers(company_id=company_id))
    stats = client.get(f"{API}/company/bookings/statistics", headers=_headers(company_id=company_id))
    completed = client.patch(f"{base}/complete", headers=_headers(company_id=company_id))
    cancel = client.delete(f"{base}/cancel", headers=_headers(company_id=company_id))

    assert confirmed.json()["status"] == "confirmed"
    assert stats.json()["confirmed_bookings"] == 1
    assert Decimal(stats.json()["total_revenue"]) == Decimal("300.00")
    assert completed.json()["status"] == "completed"
    assert cancel.status_code == 409


def test_company_cannot_touch_other_company_booking(client, make_booking):
    booking = make_booking()

    response = client.patch(f"{API}/company/bookings/{booking.id}/confirm", headers=_headers(company_id=uuid4()))

    assert response.status_code == 404
