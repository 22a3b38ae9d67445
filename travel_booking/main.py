from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from travel_booking.api.errors import register_exception_handlers
from travel_booking.api.v1.router import router as api_v1_router
from travel_booking.config.database import init_db
from travel_booking.config.settings import settings
from travel_booking.core.logging import get_logger, setup_logging
from travel_booking.core.middleware import register_middlewares

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Production schemas are managed by migrations
    if not settings.is_production():
        init_db()
    logger.info("Application started", extra={"environment": settings.ENVIRONMENT})
    yield


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=settings.CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
