"""Key/value cache with per-entry time-to-live.

Concurrent writers to the same key are last-write-wins.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Protocol


class KeyValueCache(Protocol):
    """Protocol for TTL caches consumed by the API clients."""

    def get(self, key: str) -> object | None:
        """Return the cached value, or None if missing or expired."""
        ...

    def set(self, key: str, value: object, ttl: float) -> None:
        """Store a value for ``ttl`` seconds."""
        ...

    def clear(self) -> None:
        ...


@dataclass
class _Entry:
    value: object
    expires_at: float


class MemoryCache:
    """In-memory TTL cache. Expired entries are dropped lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._store: dict[str, _Entry] = {}
        self._clock = clock

    def get(self, key: str) -> object | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._store[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl: float) -> None:
        self._store[key] = _Entry(value=value, expires_at=self._clock() + ttl)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
