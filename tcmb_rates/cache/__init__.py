"""In-process snapshot caching for TCMB documents."""

from __future__ import annotations

from tcmb_rates.cache.base_cache import SnapshotCache
from tcmb_rates.cache.memory_cache import CacheEntry, MemoryCache, default_cache

__all__ = ["CacheEntry", "MemoryCache", "SnapshotCache", "default_cache"]
