"""SQLite backed content store."""

import asyncio
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from hashbrowns.content_store.base import ContentStore
from hashbrowns.content_store.retry import (
    RetryPolicy,
    is_retryable_sqlite_error,
    with_retry,
)
from hashbrowns.core.logging import get_logger
from hashbrowns.core.metrics import STORE_OPERATIONS
from hashbrowns.errors import NotFound, StorageUnavailable

logger = get_logger(__name__)


class SQLiteContentStore(ContentStore):
    """Durable single-file store.

    Every call opens its own connection inside a worker thread, so concurrent
    requests never share a connection object.
    """

    backend_name = "sqlite"

    def __init__(
        self,
        db_path: Path,
        timeout: float = 5.0,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            db_path: Database file, created on open
            timeout: Seconds to wait on a locked database per attempt
            retry_policy: Backoff used when the database stays locked
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy(
            max_retries=5, base_delay=0.05, max_delay=1.0, backoff_factor=1.5
        )

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=self.timeout)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Connection committing on success and always closed."""
        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @with_retry((sqlite3.OperationalError,), is_retryable_sqlite_error)
    def _init_database(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    content TEXT NOT NULL
                )
            """
            )

    @with_retry((sqlite3.OperationalError,), is_retryable_sqlite_error)
    def _write(self, key: str, value: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO entries (key, content) VALUES (?, ?)",
                (key, value),
            )

    @with_retry((sqlite3.OperationalError,), is_retryable_sqlite_error)
    def _read(self, key: str) -> str | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT content FROM entries WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def _probe(self) -> None:
        with self._connection() as conn:
            conn.execute("SELECT 1 FROM entries LIMIT 1").fetchone()

    async def open(self) -> None:
        try:
            await asyncio.to_thread(self._init_database)
        except sqlite3.Error as e:
            raise StorageUnavailable() from e
        logger.info("sqlite_store_ready", db_path=str(self.db_path))

    async def put(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, key, value)
        except sqlite3.Error as e:
            STORE_OPERATIONS.labels(operation="put", outcome="error").inc()
            logger.error("store_put_failed", backend=self.backend_name, error=str(e))
            raise StorageUnavailable() from e
        STORE_OPERATIONS.labels(operation="put", outcome="ok").inc()

    async def get(self, key: str) -> str:
        try:
            value = await asyncio.to_thread(self._read, key)
        except sqlite3.Error as e:
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
            await asyncio.to_thread(self._probe)
        except sqlite3.Error as e:
            logger.warning("store_ping_failed", backend=self.backend_name, error=str(e))
            return False
        return True
