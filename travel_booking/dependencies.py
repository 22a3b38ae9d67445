"""
FastAPI dependencies: database sessions, caller identity and services.

Authentication happens upstream; the gateway forwards the authenticated
user and company as ``X-User-Id`` and ``X-Company-Id`` headers.
"""
from __future__ import annotations

from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from travel_booking.config.database import SessionLocal
from travel_booking.core.exceptions import BaseAppException, ErrorCode
from travel_booking.core.logging import user_id as user_id_var
from travel_booking.services.booking import (
    BookingApprovalService,
    BookingCancellationService,
    BookingService,
)
from travel_booking.services.review import ReviewService


# ------------------------------------------------------------------ #
# DB
# ------------------------------------------------------------------ #
def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a SQLAlchemy Session bound to SessionLocal.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ------------------------------------------------------------------ #
# Caller identity
# ------------------------------------------------------------------ #
def _parse_identity(value: Optional[str], header: str) -> UUID:
    if not value:
        raise BaseAppException(
            f"Missing {header} header",
            ErrorCode.UNAUTHORIZED,
            {"header": header},
            401,
        )
    try:
        return UUID(value)
    except ValueError as e:
        raise BaseAppException(
            f"Invalid {header} header",
            ErrorCode.UNAUTHORIZED,
            {"header": header},
            401,
        ) from e


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> UUID:
    user_id = _parse_identity(x_user_id, "X-User-Id")
    user_id_var.set(str(user_id))
    return user_id


async def get_current_company_id(x_company_id: Optional[str] = Header(None)) -> UUID:
    return _parse_identity(x_company_id, "X-Company-Id")


# ------------------------------------------------------------------ #
# Services
# ------------------------------------------------------------------ #
def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_cancellation_service(db: Session = Depends(get_db)) -> BookingCancellationService:
    return BookingCancellationService(db)


def get_approval_service(db: Session = Depends(get_db)) -> BookingApprovalService:
    return BookingApprovalService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)
