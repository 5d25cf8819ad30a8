"""Configuration for content store."""

from pathlib import Path

from hashbrowns.content_store.base import ContentStore
from hashbrowns.content_store.memory import MemoryContentStore
from hashbrowns.content_store.redis_store import RedisContentStore
from hashbrowns.content_store.retry import RetryPolicy
from hashbrowns.content_store.sqlite_store import SQLiteContentStore
from hashbrowns.core.config import Settings


def build_content_store(settings: Settings) -> ContentStore:
    """Create the content store selected by ``STORE_BACKEND``.

    Args:
        settings: Application settings

    Returns:
        An unopened ContentStore

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.STORE_BACKEND
    if backend == "memory":
        return MemoryContentStore()
    if backend == "redis":
        return RedisContentStore(
            redis_url=settings.REDIS_URL,
            key_prefix=settings.REDIS_KEY_PREFIX,
            ttl_seconds=settings.REDIS_TTL_SECONDS,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            retry_policy=RetryPolicy(max_retries=settings.REDIS_MAX_RETRIES),
        )
    if backend == "sqlite":
        return SQLiteContentStore(
            db_path=Path(settings.SQLITE_PATH), timeout=settings.SQLITE_TIMEOUT
        )
    raise ValueError(f"Unsupported store backend: {backend}")
