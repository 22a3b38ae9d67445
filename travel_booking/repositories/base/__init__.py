"""
Base repository.
"""

from travel_booking.repositories.base.base_repository import BaseRepository, ModelType, is_unique_violation

__all__ = ["BaseRepository", "ModelType", "is_unique_violation"]
