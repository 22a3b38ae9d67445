"""
Service base classes and result types.
"""

from travel_booking.services.base.base_service import BaseService
from travel_booking.services.base.service_result import ErrorSeverity, ServiceError, ServiceResult

__all__ = ["BaseService", "ServiceResult", "ServiceError", "ErrorSeverity"]
