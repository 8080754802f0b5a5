"""Process-local TTL cache keyed by document URL."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from tcmb_rates.cache.base_cache import SnapshotCache


@dataclass(frozen=True, slots=True)
class CacheEntry:
    payload: Any
    expires_at: float


class MemoryCache(SnapshotCache):
    """Dictionary backed cache with per-entry expiry.

    Expired entries are evicted lazily, on the first read after expiry.
    ``timer`` must be monotonic; tests inject a fake one.
    """

    def __init__(self, timer: Callable[[], float] = time.monotonic) -> None:
        self._timer = timer
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._timer() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.payload

    def set(self, key: str, payload: Any, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            return
        self._entries[key] = CacheEntry(payload=payload, expires_at=self._timer() + ttl_seconds)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


# Shared by the module-level convenience functions.
default_cache = MemoryCache()

__all__ = ["CacheEntry", "MemoryCache", "default_cache"]
