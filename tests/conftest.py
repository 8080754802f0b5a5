"""Shared helpers for the tcmb_rates test-suite."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from tcmb_rates.errors import TransportNotFound

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class ScriptedTransport:
    """Transport double that answers from a ``path suffix -> outcome`` table.

    An outcome is either a body string or an exception instance to raise.
    Unknown URLs behave like an unpublished document (404).
    """

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    def fetch_text(self, url: str, *, cancel_event=None) -> str:
        self.calls.append(url)
        for suffix, outcome in self.responses.items():
            if url.endswith(suffix):
                if isinstance(outcome, BaseException):
                    raise outcome
                return outcome
        raise TransportNotFound(url)


class FakeTimer:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def fixed_clock(*args: int) -> Callable[[], datetime]:
    """Return a clock frozen at the given UTC wall time."""

    instant = datetime(*args, tzinfo=timezone.utc)
    return lambda: instant


@pytest.fixture
def daily_xml() -> str:
    return (FIXTURES / "today.xml").read_text(encoding="utf-8")


@pytest.fixture
def hourly_xml() -> str:
    return (FIXTURES / "hourly-sample.xml").read_text(encoding="utf-8")
