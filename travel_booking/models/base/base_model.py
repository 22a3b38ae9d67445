"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and an abstract model with a
representation helper.
"""

from sqlalchemy.orm import declarative_base

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common methods.
    """

    __abstract__ = True

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
