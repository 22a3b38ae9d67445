"""Shared fixtures: in-memory database, catalog and booking factories."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from travel_booking.dependencies import get_db
from travel_booking.main import create_app
from travel_booking.models import OFFERABLE_MODELS, Base, Booking, BookingStatus, Destination
from travel_booking.models.booking import generate_confirmation_code

FIXED_NOW = datetime(2025, 5, 20, 12, 0, tzinfo=timezone.utc)
FIXED_TODAY = FIXED_NOW.date()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    yield session
    session.close()


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def company_id():
    return uuid4()


@pytest.fixture
def make_offerable(db_session, company_id):
    def _make(model=Destination, **overrides):
        values = {
            "company_id": company_id,
            "title": f"{model.__name__} {uuid4().hex[:6]}",
            "location": "Lisbon",
            "price": Decimal("100.00"),
            "discount_price": None,
            "is_active": True,
        }
        values.update(overrides)
        offerable = model(**values)
        db_session.add(offerable)
        db_session.commit()
        return offerable

    return _make


@pytest.fixture
def make_booking(db_session, user_id, make_offerable):
    def _make(
        offerable=None,
        status=BookingStatus.PENDING,
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 4),
        guests=2,
        created_at=FIXED_NOW,
        owner=None,
    ):
        offerable = offerable or make_offerable()
        booking = Booking(
            user_id=owner or user_id,
            company_id=offerable.company_id,
            check_in=check_in,
            check_out=check_out,
            guests=guests,
            total_price=Decimal("300.00"),
            status=status,
            confirmation_code=generate_confirmation_code(),
            created_at=created_at,
        )
        for kind, model in OFFERABLE_MODELS.items():
            if isinstance(offerable, model):
                setattr(booking, f"{kind.value}_id", offerable.id)
        db_session.add(booking)
        db_session.commit()
        return booking

    return _make


@pytest.fixture
def client(db_session):
    app = create_app()

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)
