"""
Catalog lookups across destinations, packages and offers.
"""

from decimal import Decimal
from typing import Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from travel_booking.core.exceptions import DatabaseError, OfferableNotFoundError
from travel_booking.core.logging import get_logger
from travel_booking.models.base import OfferableRef
from travel_booking.models.catalog import OFFERABLE_MODELS, Offerable

logger = get_logger(__name__)


class CatalogRepository:
    """
    Read access to the three offerable tables through ``OfferableRef``.

    Not tied to a single model, so it does not extend ``BaseRepository``.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def model_for(ref: OfferableRef) -> Type[Offerable]:
        return OFFERABLE_MODELS[ref.kind]

    def find_offerable(self, ref: OfferableRef) -> Optional[Offerable]:
        """Return the referenced listing, or None."""
        try:
            return self.db.get(self.model_for(ref), ref.id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Catalog lookup failed: {str(e)}") from e

    def get_offerable(self, ref: OfferableRef) -> Offerable:
        """
        Return the referenced listing.

        Raises:
            OfferableNotFoundError: If it does not exist
        """
        offerable = self.find_offerable(ref)
        if offerable is None:
            raise OfferableNotFoundError(ref.kind.value, str(ref.id))
        return offerable

    def lock_offerable(self, ref: OfferableRef) -> Offerable:
        """
        Load the listing with a row lock held until the transaction ends.

        Backends without ``FOR UPDATE`` support (SQLite) ignore the lock and
        rely on their own write serialization.
        """
        model = self.model_for(ref)
        stmt = (
            select(model)
            .where(model.id == ref.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        try:
            offerable = self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Catalog lock failed: {str(e)}") from e
        if offerable is None:
            raise OfferableNotFoundError(ref.kind.value, str(ref.id))
        return offerable

    def update_rating(self, offerable: Offerable, rating: Optional[Decimal]) -> Offerable:
        """Store the aggregated rating on the listing."""
        offerable.rating = rating
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Rating update failed: {str(e)}") from e
        logger.debug(
            "Offerable rating updated",
            extra={"offerable_id": str(offerable.id), "rating": str(rating)},
        )
        return offerable
