"""Public interface for the tcmb_rates package."""

from __future__ import annotations

from datetime import date, datetime
from importlib import metadata as importlib_metadata
from threading import Event
from typing import Callable, List

from tcmb_rates.cache import MemoryCache, SnapshotCache, default_cache
from tcmb_rates.config import CacheTtl, ClientSettings
from tcmb_rates.conversion import RateType, convert_amount, filter_rates, find_rate, normalize_code
from tcmb_rates.errors import (
    ErrorKind,
    InvalidCurrencyCode,
    InvalidDate,
    MalformedDocument,
    NoDataWithinSearchBound,
    RateNotFound,
    RequestCancelled,
    TcmbError,
    TransportFailure,
    TransportNotFound,
)
from tcmb_rates.ingestion.http_transport import RequestsTransport
from tcmb_rates.ingestion.models import (
    HourlyRateRecord,
    PreciousMetalRate,
    PreciousMetals,
    QuoteField,
    RateRecord,
)
from tcmb_rates.ingestion.strategy import FeedTransport
from tcmb_rates.resolver import (
    DatedDocument,
    LatestDocument,
    RequestContext,
    SnapshotResolver,
    TimedDocument,
)
from tcmb_rates.utils.dates import (
    HourSlot,
    business_today,
    current_publishable_hour_slot,
    normalize_input_date,
    parse_hour_slot,
)

__all__ = [
    "__version__",
    "CacheTtl",
    "ClientSettings",
    "ErrorKind",
    "HourSlot",
    "HourlyRateRecord",
    "InvalidCurrencyCode",
    "InvalidDate",
    "MalformedDocument",
    "MemoryCache",
    "NoDataWithinSearchBound",
    "PreciousMetalRate",
    "PreciousMetals",
    "RateNotFound",
    "RateRecord",
    "RateType",
    "RequestCancelled",
    "RequestsTransport",
    "TcmbError",
    "TcmbRates",
    "TransportFailure",
    "TransportNotFound",
    "clear_cache",
    "convert",
    "get_gold",
    "get_hourly_rate",
    "get_hourly_rates",
    "get_hourly_raw_xml",
    "get_precious_metals",
    "get_rate",
    "get_rates",
    "get_raw_xml",
    "get_silver",
    "list_currencies",
    "list_hourly_currencies",
]

try:
    __version__ = importlib_metadata.version("tcmb-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

DateInput = date | datetime | str | None
HourInput = HourSlot | str | None

GOLD_CODE = "XAU"
SILVER_CODE = "XAS"


def _coerce_date(value: DateInput) -> date | None:
    if value is None:
        return None
    return normalize_input_date(value)


def _coerce_hour(value: HourInput) -> HourSlot | None:
    if value is None or (isinstance(value, str) and value.strip().lower() == "latest"):
        return None
    return parse_hour_slot(value)


class TcmbRates:
    """Client for the TCMB daily bulletin and hourly (reeskont) feeds."""

    __slots__ = ("settings", "transport", "cache", "resolver")

    def __init__(
        self,
        *,
        transport: FeedTransport | None = None,
        cache: SnapshotCache | None = None,
        settings: ClientSettings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.transport = transport or RequestsTransport(
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            max_attempts=self.settings.max_attempts,
            backoff_seconds=self.settings.backoff_seconds,
        )
        self.cache = cache if cache is not None else MemoryCache()
        resolver_kwargs = {"clock": clock} if clock is not None else {}
        self.resolver = SnapshotResolver(self.transport, self.cache, self.settings, **resolver_kwargs)

    # ----- daily bulletin -----

    def get_rates(
        self,
        rate_date: DateInput = None,
        *,
        rate_type: RateType | str = RateType.ALL,
        fallback_to_last_business_day: bool = True,
        use_cache: bool = True,
        cancel_event: Event | None = None,
    ) -> List[RateRecord]:
        """Return the daily bulletin for ``rate_date`` (default: latest).

        When nothing is published for the requested day, earlier days are
        tried unless ``fallback_to_last_business_day`` is ``False``. The
        returned records carry the date of the bulletin actually found.
        """

        kind = RateType.coerce(rate_type)
        context = RequestContext(
            day=_coerce_date(rate_date),
            fallback_days=fallback_to_last_business_day,
            use_cache=use_cache,
            cancel_event=cancel_event,
        )
        snapshot = self.resolver.resolve_daily(context)
        return filter_rates(snapshot.records, kind)

    def get_rate(self, currency_code: str, rate_date: DateInput = None, **options) -> RateRecord | None:
        """Return one currency from the daily bulletin or ``None`` if absent."""

        normalize_code(currency_code)
        return find_rate(self.get_rates(rate_date, **options), currency_code)

    def convert(
        self,
        amount: float,
        from_code: str,
        to_code: str,
        *,
        use: QuoteField | None = None,
        rate_date: DateInput = None,
        fallback_to_last_business_day: bool = True,
        use_cache: bool = True,
        cancel_event: Event | None = None,
    ) -> float:
        if normalize_code(from_code) == normalize_code(to_code):
            return amount
        rates = self.get_rates(
            rate_date,
            fallback_to_last_business_day=fallback_to_last_business_day,
            use_cache=use_cache,
            cancel_event=cancel_event,
        )
        return convert_amount(rates, amount, from_code, to_code, use=use)

    def list_currencies(self, rate_date: DateInput = None, **options) -> List[str]:
        return [rate.code for rate in self.get_rates(rate_date, **options)]

    def get_raw_xml(self, rate_date: DateInput = None, *, cancel_event: Event | None = None) -> str:
        """Fetch one bulletin verbatim, without fallback or caching."""

        day = _coerce_date(rate_date)
        key = LatestDocument() if day is None else DatedDocument(day)
        return self.resolver.fetch_raw(self.settings.daily_url(key.path), cancel_event=cancel_event)

    # ----- hourly feed -----

    def get_hourly_rates(
        self,
        rate_date: DateInput = None,
        hour: HourInput = None,
        *,
        fallback_to_last_business_day: bool = True,
        fallback_to_previous_hour: bool = True,
        use_cache: bool = True,
        cancel_event: Event | None = None,
    ) -> List[HourlyRateRecord]:
        """Return the hourly snapshot closest to, and not after, ``hour``.

        ``hour`` defaults to the latest slot publishable at the current
        Istanbul time. Earlier slots of the same day are tried first, then
        previous days starting from 15:00.
        """

        context = RequestContext(
            day=_coerce_date(rate_date),
            hour=_coerce_hour(hour),
            fallback_days=fallback_to_last_business_day,
            fallback_hours=fallback_to_previous_hour,
            use_cache=use_cache,
            cancel_event=cancel_event,
        )
        return list(self.resolver.resolve_hourly(context).records)

    def get_hourly_rate(
        self, currency_code: str, rate_date: DateInput = None, hour: HourInput = None, **options
    ) -> HourlyRateRecord | None:
        normalize_code(currency_code)
        return find_rate(self.get_hourly_rates(rate_date, hour, **options), currency_code)

    def get_gold(self, rate_date: DateInput = None, hour: HourInput = None, **options) -> PreciousMetalRate | None:
        rate = self.get_hourly_rate(GOLD_CODE, rate_date, hour, **options)
        return PreciousMetalRate.from_hourly(rate) if rate is not None else None

    def get_silver(self, rate_date: DateInput = None, hour: HourInput = None, **options) -> PreciousMetalRate | None:
        rate = self.get_hourly_rate(SILVER_CODE, rate_date, hour, **options)
        return PreciousMetalRate.from_hourly(rate) if rate is not None else None

    def get_precious_metals(self, rate_date: DateInput = None, hour: HourInput = None, **options) -> PreciousMetals:
        """Return gold and silver from a single hourly snapshot."""

        by_code = {rate.code: rate for rate in self.get_hourly_rates(rate_date, hour, **options)}
        gold = by_code.get(GOLD_CODE)
        silver = by_code.get(SILVER_CODE)
        return PreciousMetals(
            gold=PreciousMetalRate.from_hourly(gold) if gold is not None else None,
            silver=PreciousMetalRate.from_hourly(silver) if silver is not None else None,
        )

    def list_hourly_currencies(self, rate_date: DateInput = None, hour: HourInput = None, **options) -> List[str]:
        return [rate.code for rate in self.get_hourly_rates(rate_date, hour, **options)]

    def get_hourly_raw_xml(
        self,
        rate_date: DateInput = None,
        hour: HourInput = None,
        *,
        cancel_event: Event | None = None,
    ) -> str:
        """Fetch one hourly document verbatim, without fallback or caching."""

        now = self.resolver.clock()
        day = _coerce_date(rate_date) or business_today(now)
        slot = _coerce_hour(hour) or current_publishable_hour_slot(now)
        key = TimedDocument(day, slot)
        return self.resolver.fetch_raw(self.settings.hourly_url(key.path), cancel_event=cancel_event)

    def clear_cache(self) -> None:
        self.cache.clear()


_DEFAULT_CLIENT: TcmbRates | None = None


def _default_client() -> TcmbRates:
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = TcmbRates(cache=default_cache)
    return _DEFAULT_CLIENT


def get_rates(*args, **kwargs):
    return _default_client().get_rates(*args, **kwargs)


def get_rate(*args, **kwargs):
    return _default_client().get_rate(*args, **kwargs)


def convert(*args, **kwargs):
    return _default_client().convert(*args, **kwargs)


def list_currencies(*args, **kwargs):
    return _default_client().list_currencies(*args, **kwargs)


def get_raw_xml(*args, **kwargs):
    return _default_client().get_raw_xml(*args, **kwargs)


def get_hourly_rates(*args, **kwargs):
    return _default_client().get_hourly_rates(*args, **kwargs)


def get_hourly_rate(*args, **kwargs):
    return _default_client().get_hourly_rate(*args, **kwargs)


def get_gold(*args, **kwargs):
    return _default_client().get_gold(*args, **kwargs)


def get_silver(*args, **kwargs):
    return _default_client().get_silver(*args, **kwargs)


def get_precious_metals(*args, **kwargs):
    return _default_client().get_precious_metals(*args, **kwargs)


def list_hourly_currencies(*args, **kwargs):
    return _default_client().list_hourly_currencies(*args, **kwargs)


def get_hourly_raw_xml(*args, **kwargs):
    return _default_client().get_hourly_raw_xml(*args, **kwargs)


def clear_cache() -> None:
    """Reset the process-wide cache used by the module-level functions."""

    default_cache.clear()
