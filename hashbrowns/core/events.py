"""Application startup and shutdown events."""

from collections.abc import Awaitable, Callable
from typing import Any

from hashbrowns.content_store import ContentStore
from hashbrowns.core.logging import get_logger

logger = get_logger(__name__)


def create_start_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Startup handler function
    """

    async def start_app() -> None:
        store: ContentStore = app.state.content_store
        await store.open()
        logger.info(
            "application_started",
            backend=store.backend_name,
            approved_hosts=app.state.settings.approved_hosts,
        )

    return start_app


def create_stop_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown handler function
    """

    async def stop_app() -> None:
        store: ContentStore = app.state.content_store
        await store.close()
        logger.info("application_stopped", backend=store.backend_name)

    return stop_app
