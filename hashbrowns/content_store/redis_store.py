"""Redis backed content store."""

from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from hashbrowns.content_store.base import ContentStore
from hashbrowns.content_store.retry import RetryPolicy, with_async_retry
from hashbrowns.core.logging import get_logger
from hashbrowns.core.metrics import STORE_OPERATIONS
from hashbrowns.errors import NotFound, StorageUnavailable

logger = get_logger(__name__)

# Transient faults worth another attempt
_TRANSIENT_ERRORS: tuple[type[Exception], ...] = (ConnectionError, TimeoutError)


class RedisContentStore(ContentStore):
    """Stores entries as plain Redis strings under a key prefix."""

    backend_name = "redis"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "hashbrowns:",
        ttl_seconds: int = 0,
        socket_timeout: float = 5.0,
        retry_policy: RetryPolicy | None = None,
        client: "Redis[Any] | None" = None,
    ) -> None:
        """Initialize the store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Namespace prepended to every key
            ttl_seconds: Expiry applied on write, 0 for none
            socket_timeout: Per-command socket timeout in seconds
            retry_policy: Backoff used for transient connection faults
            client: Pre-built client, mostly for tests
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds
        self.socket_timeout = socket_timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self._client = client

    @property
    def client(self) -> "Redis[Any]":
        if self._client is None:
            self._client = Redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_timeout,
                health_check_interval=15,
            )
        return self._client

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    @with_async_retry(_TRANSIENT_ERRORS)
    async def _set(self, key: str, value: str) -> None:
        await self.client.set(
            self._full_key(key), value, ex=self.ttl_seconds or None
        )

    @with_async_retry(_TRANSIENT_ERRORS)
    async def _fetch(self, key: str) -> str | None:
        return await self.client.get(self._full_key(key))

    async def put(self, key: str, value: str) -> None:
        try:
            await self._set(key, value)
        except RedisError as e:
            STORE_OPERATIONS.labels(operation="put", outcome="error").inc()
            logger.error("store_put_failed", backend=self.backend_name, error=str(e))
            raise StorageUnavailable() from e
        STORE_OPERATIONS.labels(operation="put", outcome="ok").inc()

    async def get(self, key: str) -> str:
        try:
            value = await self._fetch(key)
        except RedisError as e:
            STORE_OPERATIONS.labels(operation="get", outcome="error").inc()
            logger.error("store_get_failed", backend=self.backend_name, error=str(e))
            raise StorageUnavailable() from e
        if value is None:
            STORE_OPERATIONS.labels(operation="get", outcome="miss").inc()
            raise NotFound()
        STORE_OPERATIONS.labels(operation="get", outcome="hit").inc()
        return value

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning("store_ping_failed", backend=self.backend_name, error=str(e))
            return False

    async def open(self) -> None:
        # Connection is lazy; a failed ping only degrades health
        if await self.ping():
            logger.info("redis_store_connected", key_prefix=self.key_prefix)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
