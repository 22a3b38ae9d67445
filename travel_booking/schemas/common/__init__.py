"""
Shared schema building blocks.
"""

from travel_booking.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["BaseSchema", "BaseCreateSchema", "BaseResponseSchema"]
