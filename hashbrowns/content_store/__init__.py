"""Content-addressed storage of submitted text."""

from hashbrowns.content_store.base import ContentStore
from hashbrowns.content_store.config import build_content_store
from hashbrowns.content_store.keys import KEY_LENGTH, derive_key
from hashbrowns.content_store.memory import MemoryContentStore
from hashbrowns.content_store.models import ContentEntry
from hashbrowns.content_store.redis_store import RedisContentStore
from hashbrowns.content_store.sqlite_store import SQLiteContentStore

__all__ = [
    "KEY_LENGTH",
    "ContentEntry",
    "ContentStore",
    "MemoryContentStore",
    "RedisContentStore",
    "SQLiteContentStore",
    "build_content_store",
    "derive_key",
]
