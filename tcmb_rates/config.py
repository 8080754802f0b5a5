"""Client configuration for :class:`tcmb_rates.TcmbRates`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from tcmb_rates.ingestion.http_transport import DEFAULT_USER_AGENT

DAILY_BASE_URL: Final[str] = "https://www.tcmb.gov.tr/kurlar"
HOURLY_BASE_URL: Final[str] = "https://www.tcmb.gov.tr/reeskontkur"

# Calendar days searched before the requested day when falling back.
MAX_DAY_RETRIES: Final[int] = 15


@dataclass(frozen=True, slots=True)
class CacheTtl:
    """Time-to-live values, in seconds, chosen when a snapshot is cached."""

    daily_today: int = 300
    hourly_current_slot: int = 120
    hourly_past_slot: int = 3600
    past_day: int = 86400


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Tunables shared by the transport and the resolver."""

    daily_base_url: str = DAILY_BASE_URL
    hourly_base_url: str = HOURLY_BASE_URL
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_attempts: int = 3
    backoff_seconds: float = 1.0
    max_day_retries: int = MAX_DAY_RETRIES
    ttl: CacheTtl = field(default_factory=CacheTtl)

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must not be negative")
        if self.max_day_retries < 0:
            raise ValueError("max_day_retries must not be negative")

    def daily_url(self, path: str) -> str:
        return f"{self.daily_base_url.rstrip('/')}/{path}"

    def hourly_url(self, path: str) -> str:
        return f"{self.hourly_base_url.rstrip('/')}/{path}"


__all__ = ["CacheTtl", "ClientSettings", "DAILY_BASE_URL", "HOURLY_BASE_URL", "MAX_DAY_RETRIES"]
