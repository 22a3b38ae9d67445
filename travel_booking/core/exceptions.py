"""
Custom Exceptions for the Travel Booking Application

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Business logic errors
    INVALID_STATE = "INVALID_STATE"
    CANCELLATION_WINDOW_EXPIRED = "CANCELLATION_WINDOW_EXPIRED"
    RATING_TOO_EARLY = "RATING_TOO_EARLY"
    CONFLICT = "CONFLICT"

    # Security errors
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        self.field_errors = field_errors or {}
        details = {"field_errors": self.field_errors} if self.field_errors else {}
        super().__init__(message, error_code, details, status_code)

    @property
    def field(self) -> Optional[str]:
        """First offending field, if the error is field-scoped."""
        return next(iter(self.field_errors), None)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details, 404)


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is missing or not visible to the caller"""

    def __init__(self, booking_id: Optional[str] = None, message: Optional[str] = None):
        super().__init__("Booking", booking_id, message)


class OfferableNotFoundError(ResourceNotFoundError):
    """Exception raised when a destination, package or offer is missing"""

    def __init__(self, kind: str, offerable_id: Optional[str] = None):
        super().__init__(kind.capitalize(), offerable_id)
        self.details["kind"] = kind


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised for database operation errors"""

    def __init__(
        self,
        message: str = "Database operation failed",
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message, error_code, details, status_code)


class DuplicateEntryError(DatabaseError):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, ErrorCode.ALREADY_EXISTS, details, 409)


# ========================================
# Business Logic Exceptions
# ========================================

class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        booking_id: Optional[str] = None,
        status_code: int = 400
    ):
        details = {"booking_id": booking_id}
        super().__init__(message, error_code, details, status_code)


class InvalidBookingStateError(BookingError):
    """Exception raised when a booking's status does not allow the operation"""

    def __init__(
        self,
        message: str = "Booking cannot be modified in its current status",
        booking_id: Optional[str] = None,
        current_status: Optional[str] = None,
        allowed_statuses: Optional[List[str]] = None
    ):
        super().__init__(message, ErrorCode.INVALID_STATE, booking_id, 409)
        self.details.update({
            "current_status": current_status,
            "allowed_statuses": allowed_statuses or [],
        })


class CancellationWindowExpiredError(BookingError):
    """Exception raised when cancellation is attempted after the grace period"""

    def __init__(
        self,
        message: str = "Cancellation period has expired",
        booking_id: Optional[str] = None,
        window_hours: Optional[int] = None,
        hours_elapsed: Optional[float] = None
    ):
        super().__init__(message, ErrorCode.CANCELLATION_WINDOW_EXPIRED, booking_id, 409)
        self.details.update({
            "window_hours": window_hours,
            "hours_elapsed": hours_elapsed,
        })


class RatingTooEarlyError(BookingError):
    """Exception raised when a trip is rated before it has ended"""

    def __init__(
        self,
        message: str = "Rating is only available after the trip ends",
        booking_id: Optional[str] = None,
        check_out: Optional[str] = None
    ):
        super().__init__(message, ErrorCode.RATING_TOO_EARLY, booking_id, 403)
        self.details["check_out"] = check_out


class DuplicateReviewError(DuplicateEntryError):
    """Exception raised when a booking has already been rated by the user"""

    def __init__(self, booking_id: Optional[str] = None, user_id: Optional[str] = None):
        super().__init__(
            "You have already rated this booking",
            details={"booking_id": booking_id, "user_id": user_id},
        )


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'BookingNotFoundError',
    'OfferableNotFoundError',
    'DatabaseError',
    'DuplicateEntryError',
    'BookingError',
    'InvalidBookingStateError',
    'CancellationWindowExpiredError',
    'RatingTooEarlyError',
    'DuplicateReviewError',
]
