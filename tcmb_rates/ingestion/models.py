"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Mapping

from tcmb_rates.utils.dates import HourSlot

LOCAL_CURRENCY = "TRY"

QuoteField = Literal["forex_buying", "forex_selling", "banknote_buying", "banknote_selling"]
QUOTE_FIELDS: tuple[QuoteField, ...] = (
    "forex_buying",
    "forex_selling",
    "banknote_buying",
    "banknote_selling",
)


@dataclass(frozen=True, slots=True)
class RateRecord:
    """One currency row of the daily TCMB bulletin (``today.xml``)."""

    code: str
    currency_code: str
    name: str
    rate_date: date
    effective_date: str
    name_en: str | None = None
    unit: int = 1
    forex_buying: float | None = None
    forex_selling: float | None = None
    banknote_buying: float | None = None
    banknote_selling: float | None = None
    cross_rate_usd: float | None = None
    cross_rate_other: float | None = None
    raw: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)

    @property
    def has_forex(self) -> bool:
        return self.forex_buying is not None or self.forex_selling is not None

    @property
    def has_banknote(self) -> bool:
        return self.banknote_buying is not None or self.banknote_selling is not None

    def quote(self, field_name: QuoteField) -> float | None:
        if field_name not in QUOTE_FIELDS:
            raise ValueError(f"Unknown quote field: {field_name}")
        return getattr(self, field_name)


@dataclass(frozen=True, slots=True)
class HourlyRateRecord:
    """One entry of an hourly (reeskont) snapshot."""

    code: str
    currency_code: str
    name: str
    name_en: str
    rate_date: date
    hour: HourSlot
    timestamp: str
    unit: int = 1
    buying: float = 0.0
    base_currency: str = LOCAL_CURRENCY
    order_no: int = 0
    raw: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class PreciousMetalRate:
    code: Literal["XAU", "XAS"]
    name: str
    name_en: str
    unit: int
    buying: float
    rate_date: date
    hour: HourSlot
    timestamp: str

    @classmethod
    def from_hourly(cls, record: HourlyRateRecord) -> "PreciousMetalRate":
        return cls(
            code=record.code,  # type: ignore[arg-type]
            name=record.name,
            name_en=record.name_en,
            unit=record.unit,
            buying=record.buying,
            rate_date=record.rate_date,
            hour=record.hour,
            timestamp=record.timestamp,
        )


@dataclass(frozen=True, slots=True)
class PreciousMetals:
    gold: PreciousMetalRate | None
    silver: PreciousMetalRate | None


__all__ = [
    "HourlyRateRecord",
    "LOCAL_CURRENCY",
    "PreciousMetalRate",
    "PreciousMetals",
    "QUOTE_FIELDS",
    "QuoteField",
    "RateRecord",
]
