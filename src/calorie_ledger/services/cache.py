"""In-memory cache for open tracker sessions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Generic, Protocol, TypeVar

_ValueT = TypeVar("_ValueT")


class Cache(Protocol[_ValueT]):
    """Cache interface keyed by string."""

    def get(self, key: str) -> _ValueT | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: _ValueT, ttl_seconds: int) -> None:
        """Store a value with a TTL in seconds."""

    def pop(self, key: str) -> None:
        """Forget a cached value."""


@dataclass
class _CacheEntry(Generic[_ValueT]):
    value: _ValueT
    expires_at: datetime


class InMemoryCache(Generic[_ValueT]):
    """Process-local cache; entries expire lazily on read."""

    def __init__(self) -> None:
        self._entries: dict[str, _CacheEntry[_ValueT]] = {}

    def get(self, key: str) -> _ValueT | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: _ValueT, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def pop(self, key: str) -> None:
        """Drop a cached value if present."""
        self._entries.pop(key, None)
