"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the travel booking service
"""
from fastapi import APIRouter

from travel_booking.api.v1 import bookings, company_bookings

router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(bookings.router)
router.include_router(company_bookings.router)

__all__ = ["router"]
