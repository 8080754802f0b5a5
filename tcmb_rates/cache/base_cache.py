"""Cache strategy interface used by the resolver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class SnapshotCache(ABC):
    """Common interface implemented by every snapshot cache."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the live payload stored under ``key`` or ``None``."""

    @abstractmethod
    def set(self, key: str, payload: Any, ttl_seconds: float) -> None:
        """Store ``payload`` under ``key`` for ``ttl_seconds``."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""


__all__ = ["SnapshotCache"]
