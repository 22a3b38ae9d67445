"""
Database connection settings for the travel booking service.
Provides SQLAlchemy session management and connection pooling.
"""

import logging
import time
from typing import Any, Dict

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from travel_booking.config.settings import settings

logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 0.5


def _engine_options() -> Dict[str, Any]:
    """Build engine keyword arguments for the configured backend."""
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
    }
    if settings.is_sqlite():
        # SQLite connections are shared across FastAPI's threadpool
        options["connect_args"] = {"check_same_thread": False, **settings.DB_CONNECT_ARGS}
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=3600,
            connect_args=settings.DB_CONNECT_ARGS,
        )
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options())

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - start timer"""
    conn.info.setdefault('query_start_time', []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - stop timer and log if slow query"""
    total_time = time.time() - conn.info['query_start_time'].pop()

    if total_time > SLOW_QUERY_SECONDS:
        logger.warning(
            f"Slow query detected ({total_time:.4f}s): {statement[:100]}..."
        )


def init_db(bind: Engine = engine) -> None:
    """
    Create all tables for registered models.

    Suitable for development and tests; production schemas are migrated.
    """
    from travel_booking.models import Base

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created", extra={"tables": len(Base.metadata.tables)})
