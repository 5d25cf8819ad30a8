"""Content store interface."""

from abc import ABC, abstractmethod

from hashbrowns.content_store.keys import derive_key
from hashbrowns.content_store.models import ContentEntry


class ContentStore(ABC):
    """Associative store mapping derived keys to the content they address.

    ``put`` overwrites unconditionally. Writing the same content twice lands
    the same bytes under the same key, so repeated writes are harmless; two
    different contents that share a key replace each other.

    Backends raise :class:`~hashbrowns.errors.NotFound` for absent keys and
    :class:`~hashbrowns.errors.StorageUnavailable` when they cannot be reached.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get(self, key: str) -> str:
        raise NotImplementedError

    async def ping(self) -> bool:
        """Return True when the backend is reachable."""
        return True

    async def open(self) -> None:
        """Acquire backend resources."""

    async def close(self) -> None:
        """Release backend resources."""

    async def store_content(self, content: str) -> ContentEntry:
        """Derive the key for ``content`` and store it.

        Args:
            content: Text to store

        Returns:
            ContentEntry holding the derived key
        """
        key = derive_key(content)
        await self.put(key, content)
        return ContentEntry(key=key, content=content)
