"""Main FastAPI application module."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from hashbrowns.api.router import router
from hashbrowns.content_store import ContentStore, build_content_store
from hashbrowns.core.config import Settings
from hashbrowns.core.events import create_start_app_handler, create_stop_app_handler
from hashbrowns.core.logging import configure_logging
from hashbrowns.middleware.allowlist import AllowedHostsMiddleware
from hashbrowns.middleware.correlation import CorrelationMiddleware
from hashbrowns.middleware.errors import (
    ErrorHandlingMiddleware,
    register_exception_handlers,
)
from hashbrowns.middleware.metrics import MetricsMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await create_start_app_handler(app)()
    try:
        yield
    finally:
        await create_stop_app_handler(app)()


def create_app(
    settings: Settings | None = None, store: ContentStore | None = None
) -> FastAPI:
    """Build the application.

    Args:
        settings: Configuration, read from the environment when omitted
        store: Content store to serve, built from ``settings`` when omitted

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = Settings()
    if store is None:
        store = build_content_store(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Content-addressable text store",
        version=settings.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        default_response_class=JSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.content_store = store

    # Add middleware in order (inside -> out):
    # 1. Error handling (innermost)
    # 2. Metrics
    # 3. Host allowlist (rejects before metrics and routing)
    # 4. Correlation (outermost, adds request ID)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        AllowedHostsMiddleware, approved_hosts=settings.approved_hosts
    )
    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)

    app.include_router(router)
    return app


def create_app_from_env() -> FastAPI:
    """ASGI factory: configure logging and build the app from the environment."""
    settings = Settings()
    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
    return create_app(settings)
