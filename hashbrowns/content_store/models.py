"""Data models for content store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentEntry:
    """Represents an entry in the content store."""

    key: str
    content: str
