"""
Translation of service failures and request validation errors into the
API error body ``{"error": {"code", "message", "details"}}``.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from travel_booking.core.exceptions import BaseAppException, ErrorCode
from travel_booking.core.logging import get_logger
from travel_booking.services.base import ServiceError, ServiceResult

logger = get_logger(__name__)

ERROR_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_STATE: 409,
    ErrorCode.CANCELLATION_WINDOW_EXPIRED: 409,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.CONFLICT: 409,
    ErrorCode.RATING_TOO_EARLY: 403,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.INSUFFICIENT_PERMISSIONS: 403,
}


class ServiceFailure(Exception):
    """Raised by endpoints to return a failed ``ServiceResult`` to the client."""

    def __init__(self, error: ServiceError):
        self.error = error
        super().__init__(error.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS.get(self.error.code, 500)


def unwrap(result: ServiceResult) -> Any:
    """Return the result data, or raise ``ServiceFailure``."""
    if not result.is_success:
        raise ServiceFailure(result.error)
    return result.data


def error_body(code: ErrorCode, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": {"code": code.value, "message": message, "details": details or {}}}


def _field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path", "header")]
        field = ".".join(loc) or "body"
        field_errors.setdefault(field, []).append(error["msg"].removeprefix("Value error, "))
    return field_errors


async def service_failure_handler(request: Request, exc: ServiceFailure) -> JSONResponse:
    details = dict(exc.error.details or {})
    if exc.status_code >= 500:
        # Internal details stay in the logs
        details = {}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error.code, exc.error.message, details),
    )


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, exc.details),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors = _field_errors(exc)
    first_field = next(iter(field_errors), "body")
    logger.debug("Request validation failed", extra={"fields": list(field_errors)})
    return JSONResponse(
        status_code=422,
        content=error_body(
            ErrorCode.VALIDATION_ERROR,
            field_errors.get(first_field, ["Validation failed"])[0],
            {"field_errors": field_errors},
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceFailure, service_failure_handler)
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = [
    "ERROR_STATUS",
    "ServiceFailure",
    "unwrap",
    "error_body",
    "register_exception_handlers",
]
