"""Backward search over (day, hour slot) for the newest published snapshot.

The resolver turns a request into a search plan: an ordered list of days,
each holding the retrieval keys to try for that day. Candidates are tried
strictly in order, one network attempt at a time, until one yields a
document or the plan is exhausted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from threading import Event
from typing import Callable, Sequence, TypeVar, Union

from tcmb_rates.cache.base_cache import SnapshotCache
from tcmb_rates.config import ClientSettings
from tcmb_rates.errors import (
    NoDataWithinSearchBound,
    RequestCancelled,
    TransportFailure,
    TransportNotFound,
)
from tcmb_rates.ingestion.daily_xml import parse_daily_xml
from tcmb_rates.ingestion.hourly_xml import parse_hourly_xml
from tcmb_rates.ingestion.strategy import FeedTransport
from tcmb_rates.utils.dates import (
    LATEST_DAILY_PATH,
    LATEST_HOUR_SLOT,
    HourSlot,
    business_today,
    current_publishable_hour_slot,
    daily_path,
    hour_slots_descending_from,
    hourly_path,
    previous_calendar_day,
)
from tcmb_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

RecordT = TypeVar("RecordT")
Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class LatestDocument:
    """The daily feed's ``today.xml``."""

    @property
    def path(self) -> str:
        return LATEST_DAILY_PATH


@dataclass(frozen=True, slots=True)
class DatedDocument:
    day: date

    @property
    def path(self) -> str:
        return daily_path(self.day)


@dataclass(frozen=True, slots=True)
class TimedDocument:
    day: date
    hour: HourSlot

    @property
    def path(self) -> str:
        return hourly_path(self.day, self.hour)


RetrievalKey = Union[LatestDocument, DatedDocument, TimedDocument]


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Per-call options shared by the daily and hourly searches."""

    day: date | None = None
    hour: HourSlot | None = None
    fallback_days: bool = True
    fallback_hours: bool = True
    use_cache: bool = True
    cancel_event: Event | None = None


@dataclass(frozen=True, slots=True)
class ResolvedSnapshot:
    records: tuple
    key: RetrievalKey
    url: str
    from_cache: bool = False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _raise_if_cancelled(url: str, cancel_event: Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelled(url)


class SnapshotResolver:
    """Resolve daily and hourly snapshots through cache and transport."""

    def __init__(
        self,
        transport: FeedTransport,
        cache: SnapshotCache,
        settings: ClientSettings | None = None,
        clock: Clock = _utc_now,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.settings = settings or ClientSettings()
        self.clock = clock

    def resolve_daily(self, context: RequestContext) -> ResolvedSnapshot:
        now = self.clock()
        today = business_today(now)
        start = context.day or today
        plan: list[list[RetrievalKey]] = []
        day = start
        for index in range(self._extra_days(context) + 1):
            if index == 0 and context.day is None:
                plan.append([LatestDocument()])
            else:
                plan.append([DatedDocument(day)])
            day = previous_calendar_day(day)

        ttl = self.settings.ttl

        def ttl_for(key: RetrievalKey) -> int:
            if isinstance(key, LatestDocument) or getattr(key, "day", None) == today:
                return ttl.daily_today
            return ttl.past_day

        return self._search(plan, self.settings.daily_url, parse_daily_xml, ttl_for, context)

    def resolve_hourly(self, context: RequestContext) -> ResolvedSnapshot:
        now = self.clock()
        today = business_today(now)
        current_slot = current_publishable_hour_slot(now)
        start_hour = context.hour or current_slot
        plan: list[list[RetrievalKey]] = []
        day = context.day or today
        hour = start_hour
        for _ in range(self._extra_days(context) + 1):
            slots = hour_slots_descending_from(hour) if context.fallback_hours else [hour]
            plan.append([TimedDocument(day, slot) for slot in slots])
            day = previous_calendar_day(day)
            hour = LATEST_HOUR_SLOT

        ttl = self.settings.ttl

        def ttl_for(key: RetrievalKey) -> int:
            assert isinstance(key, TimedDocument)
            if key.day != today:
                return ttl.past_day
            if key.hour == current_slot:
                return ttl.hourly_current_slot
            return ttl.hourly_past_slot

        return self._search(plan, self.settings.hourly_url, parse_hourly_xml, ttl_for, context)

    def fetch_raw(self, url: str, *, cancel_event: Event | None = None) -> str:
        """Fetch ``url`` once, bypassing the cache and the fallback search."""

        _raise_if_cancelled(url, cancel_event)
        return self.transport.fetch_text(url, cancel_event=cancel_event)

    def _extra_days(self, context: RequestContext) -> int:
        return self.settings.max_day_retries if context.fallback_days else 0

    def _search(
        self,
        plan: Sequence[Sequence[RetrievalKey]],
        build_url: Callable[[str], str],
        parser: Callable[[str], Sequence[RecordT]],
        ttl_for: Callable[[RetrievalKey], int],
        context: RequestContext,
    ) -> ResolvedSnapshot:
        last_error: TransportFailure | None = None
        attempts = 0
        for candidates in plan:
            for key in candidates:
                url = build_url(key.path)
                _raise_if_cancelled(url, context.cancel_event)
                if context.use_cache:
                    cached = self.cache.get(url)
                    if cached is not None:
                        LOGGER.debug("Cache hit for %s", url)
                        return ResolvedSnapshot(records=cached, key=key, url=url, from_cache=True)

                attempts += 1
                LOGGER.debug("Fetching candidate %s (attempt %s)", url, attempts)
                try:
                    body = self.transport.fetch_text(url, cancel_event=context.cancel_event)
                except RequestCancelled:
                    raise
                except TransportNotFound as exc:
                    LOGGER.debug("Nothing published at %s", url)
                    last_error = exc
                    continue
                except TransportFailure as exc:
                    if not context.fallback_days:
                        raise
                    LOGGER.warning("Fetching %s failed, continuing search: %s", url, exc)
                    last_error = exc
                    continue

                records = tuple(parser(body))
                if context.use_cache:
                    self.cache.set(url, records, ttl_for(key))
                LOGGER.info("Resolved %s after %s attempt(s)", url, attempts)
                return ResolvedSnapshot(records=records, key=key, url=url)

        raise NoDataWithinSearchBound(
            f"No TCMB data found after {attempts} attempt(s) within {len(plan)} day(s)",
            last_error=last_error,
        )


__all__ = [
    "DatedDocument",
    "LatestDocument",
    "RequestContext",
    "ResolvedSnapshot",
    "RetrievalKey",
    "SnapshotResolver",
    "TimedDocument",
]
