"""Pure arithmetic over a resolved daily rate set."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence, TypeVar

from tcmb_rates.errors import InvalidCurrencyCode, RateNotFound
from tcmb_rates.ingestion.models import LOCAL_CURRENCY, QUOTE_FIELDS, HourlyRateRecord, QuoteField, RateRecord

RecordT = TypeVar("RecordT", RateRecord, HourlyRateRecord)


class RateType(str, Enum):
    """Which quote family a caller is interested in."""

    FOREX = "forex"
    BANKNOTE = "banknote"
    ALL = "all"

    @classmethod
    def coerce(cls, value: "RateType | str") -> "RateType":
        try:
            return cls(str(value.value if isinstance(value, RateType) else value).lower())
        except ValueError as exc:
            raise ValueError("rate_type must be one of: forex, banknote, all") from exc


def normalize_code(code: str) -> str:
    cleaned = (code or "").strip().upper()
    if not cleaned:
        raise InvalidCurrencyCode(code)
    return cleaned


def filter_rates(rates: Iterable[RateRecord], rate_type: RateType | str = RateType.ALL) -> list[RateRecord]:
    kind = RateType.coerce(rate_type)
    if kind is RateType.FOREX:
        return [rate for rate in rates if rate.has_forex]
    if kind is RateType.BANKNOTE:
        return [rate for rate in rates if rate.has_banknote]
    return list(rates)


def find_rate(rates: Iterable[RecordT], code: str) -> RecordT | None:
    """Case-insensitive lookup on ``code`` or ``currency_code``."""

    wanted = normalize_code(code)
    for rate in rates:
        if rate.code.upper() == wanted or rate.currency_code.upper() == wanted:
            return rate
    return None


def _quote(rates: Sequence[RateRecord], code: str, field_name: QuoteField) -> float:
    rate = find_rate(rates, code)
    if rate is None:
        raise RateNotFound(f"Currency {code} not found in TCMB rates")
    value = rate.quote(field_name)
    if value is None:
        raise RateNotFound(f"{field_name} rate not available for {code}")
    return value


def convert_amount(
    rates: Sequence[RateRecord],
    amount: float,
    from_code: str,
    to_code: str,
    *,
    use: QuoteField | None = None,
) -> float:
    """Convert ``amount`` between two currencies through TRY.

    Selling from TRY divides by the target's ``forex_selling``; buying into
    TRY multiplies by the source's ``forex_buying``. Cross conversions chain
    both legs. ``use`` overrides the quote field on every leg. The bulletin's
    ``unit`` is not applied.
    """

    source = normalize_code(from_code)
    target = normalize_code(to_code)
    if use is not None and use not in QUOTE_FIELDS:
        raise ValueError(f"use must be one of: {', '.join(QUOTE_FIELDS)}")
    if source == target:
        return amount

    if source == LOCAL_CURRENCY:
        return amount / _quote(rates, target, use or "forex_selling")
    if target == LOCAL_CURRENCY:
        return amount * _quote(rates, source, use or "forex_buying")

    in_local = amount * _quote(rates, source, use or "forex_buying")
    return in_local / _quote(rates, target, use or "forex_selling")


__all__ = ["RateType", "convert_amount", "filter_rates", "find_rate", "normalize_code"]
