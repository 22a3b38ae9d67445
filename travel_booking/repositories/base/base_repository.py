"""
Base repository with standardized CRUD operations and error handling.

Repositories flush but never commit; the owning service decides when a
unit of work is committed or rolled back.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from travel_booking.core.exceptions import DatabaseError, DuplicateEntryError, ResourceNotFoundError
from travel_booking.core.logging import get_logger
from travel_booking.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the integrity error comes from a unique constraint or key."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate" in message


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over a single model.

    Provides create, lookup, update and count helpers that translate
    SQLAlchemy failures into application exceptions.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Session Helpers ====================

    def flush(self) -> None:
        """Flush pending changes, mapping constraint violations."""
        try:
            self.db.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntryError(
                    f"{self.model.__name__} violates a unique constraint",
                    details={"reason": str(e.orig)},
                ) from e
            raise DatabaseError(
                f"{self.model.__name__} violates a database constraint",
                details={"reason": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Flush failed: {str(e)}") from e

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so generated values are populated.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: On check or foreign key violations and other failures
        """
        self.db.add(entity)
        self.flush()
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def not_found(self, id: UUID) -> ResourceNotFoundError:
        """Error raised when an entity is missing or not visible."""
        return ResourceNotFoundError(self.model.__name__, str(id))

    def find_by_id(self, id: UUID) -> Optional[ModelType]:
        """Find entity by ID, or None."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Find by ID failed: {str(e)}") from e

    def get_by_id(self, id: UUID) -> ModelType:
        """
        Get entity by ID or raise.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise self.not_found(id)
        return entity

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Optional[Dict[str, Any]] = None) -> ModelType:
        """Apply attribute updates to a loaded entity and flush pending changes."""
        for key, value in (data or {}).items():
            if not hasattr(entity, key):
                raise AttributeError(f"{self.model.__name__} has no attribute {key!r}")
            setattr(entity, key, value)
        self.flush()
        logger.debug(f"Updated {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Count Operations ====================

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        for key, value in (criteria or {}).items():
            stmt = stmt.where(getattr(self.model, key) == value)
        try:
            return self.db.scalar(stmt) or 0
        except SQLAlchemyError as e:
            raise DatabaseError(f"Count failed: {str(e)}") from e

    def exists(self, criteria: Dict[str, Any]) -> bool:
        return self.count(criteria) > 0
