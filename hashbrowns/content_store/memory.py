"""In-memory content store for tests and local development."""

from hashbrowns.content_store.base import ContentStore
from hashbrowns.core.metrics import STORE_OPERATIONS
from hashbrowns.errors import NotFound


class MemoryContentStore(ContentStore):
    """Dictionary backed store. Data is lost when the process exits."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    async def put(self, key: str, value: str) -> None:
        self._entries[key] = value
        STORE_OPERATIONS.labels(operation="put", outcome="ok").inc()

    async def get(self, key: str) -> str:
        try:
            value = self._entries[key]
        except KeyError:
            STORE_OPERATIONS.labels(operation="get", outcome="miss").inc()
            raise NotFound() from None
        STORE_OPERATIONS.labels(operation="get", outcome="hit").inc()
        return value

    def __len__(self) -> int:
        return len(self._entries)
