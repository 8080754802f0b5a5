"""Transport contract the resolver depends on."""

from __future__ import annotations

from threading import Event
from typing import Protocol


class FeedTransport(Protocol):
    """Contract for fetching raw feed documents.

    Implementations return the document body as text and raise
    :class:`~tcmb_rates.errors.TransportNotFound` for a missing document,
    :class:`~tcmb_rates.errors.RequestCancelled` when ``cancel_event`` fires,
    and :class:`~tcmb_rates.errors.TransportFailure` for anything else.
    """

    def fetch_text(self, url: str, *, cancel_event: Event | None = None) -> str:
        ...  # pragma: no cover - protocol definition


__all__ = ["FeedTransport"]
