"""
Catalog repository.
"""

from travel_booking.repositories.catalog.catalog_repository import CatalogRepository

__all__ = ["CatalogRepository"]
