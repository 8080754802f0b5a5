"""Date and hour encodings used by the TCMB daily and hourly feeds."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from enum import Enum

from tcmb_rates.errors import InvalidDate

# TCMB publishes on Istanbul time, which has been fixed at UTC+3 since 2016.
BUSINESS_TIMEZONE = timezone(timedelta(hours=3), name="TRT")

LATEST_DAILY_PATH = "today.xml"

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TR_DATE = re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$")
_LOOSE_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


class HourSlot(str, Enum):
    """Intraday publication times of the hourly (reeskont) feed."""

    H10 = "10:00"
    H11 = "11:00"
    H12 = "12:00"
    H13 = "13:00"
    H14 = "14:00"
    H15 = "15:00"

    @property
    def hour(self) -> int:
        return int(self.value[:2])

    @property
    def path_token(self) -> str:
        """Return the ``HHMM`` form used inside hourly document paths."""

        return self.value.replace(":", "")

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


HOUR_SLOTS: tuple[HourSlot, ...] = tuple(HourSlot)
EARLIEST_HOUR_SLOT = HOUR_SLOTS[0]
LATEST_HOUR_SLOT = HOUR_SLOTS[-1]


def _build_date(year: str, month: str, day: str, original: object) -> date:
    try:
        return date(int(year), int(month), int(day))
    except ValueError as exc:
        raise InvalidDate(f"Invalid calendar date: {original!r}") from exc


def normalize_input_date(value: date | datetime | str) -> date:
    """Parse caller input into a :class:`date`.

    Accepts ``date``/``datetime`` objects, ISO ``YYYY-MM-DD`` strings and the
    ``DD.MM.YYYY`` form common in Turkey.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        iso_match = _ISO_DATE.match(text)
        if iso_match:
            year, month, day = iso_match.groups()
            return _build_date(year, month, day, value)
        tr_match = _TR_DATE.match(text)
        if tr_match:
            day, month, year = tr_match.groups()
            return _build_date(year, month, day, value)
    raise InvalidDate(f"Unsupported date format: {value!r}")


def parse_hour_slot(value: HourSlot | str) -> HourSlot:
    """Return the :class:`HourSlot` for ``value`` or raise :class:`InvalidDate`."""

    if isinstance(value, HourSlot):
        return value
    try:
        return HourSlot(str(value).strip())
    except ValueError as exc:
        valid = ", ".join(slot.value for slot in HOUR_SLOTS)
        raise InvalidDate(f"Invalid hour {value!r}; expected one of {valid}") from exc


def daily_path(day: date) -> str:
    return f"{day:%Y%m}/{day:%d%m%Y}.xml"


def hourly_path(day: date, hour: HourSlot) -> str:
    return f"{day:%Y%m}/{day:%d%m%Y}-{hour.path_token}.xml"


def previous_calendar_day(day: date) -> date:
    return day - timedelta(days=1)


def business_now(now: datetime | None = None) -> datetime:
    """Return ``now`` (default: the wall clock) expressed in Istanbul time."""

    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(BUSINESS_TIMEZONE)


def business_today(now: datetime | None = None) -> date:
    return business_now(now).date()


def current_publishable_hour_slot(now: datetime | None = None) -> HourSlot:
    """Map the Istanbul wall clock to the most recent publishable slot.

    Before the first slot of the day the previous cycle's last slot is
    returned, which makes the resolver exhaust today and fall back a day.
    """

    hour = business_now(now).hour
    if hour < EARLIEST_HOUR_SLOT.hour or hour >= LATEST_HOUR_SLOT.hour:
        return LATEST_HOUR_SLOT
    return HourSlot(f"{hour:02d}:00")


def hour_slots_descending_from(start: HourSlot | str) -> list[HourSlot]:
    """Return the slots from ``start`` down to the earliest slot, inclusive."""

    descending = list(reversed(HOUR_SLOTS))
    try:
        slot = parse_hour_slot(start)
    except InvalidDate:
        return descending
    return descending[descending.index(slot) :]


def normalize_document_date(raw: str) -> str:
    """Zero-pad loosely formatted ``YYYY-M-D`` document dates."""

    text = raw.strip()
    match = _LOOSE_ISO_DATE.match(text)
    if not match:
        return text
    year, month, day = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


def slash_date_to_iso(raw: str) -> str:
    """Convert the daily bulletin's ``MM/DD/YYYY`` attribute into ISO form."""

    text = raw.strip()
    match = _SLASH_DATE.match(text)
    if not match:
        return text
    month, day, year = match.groups()
    return f"{year}-{int(month):02d}-{int(day):02d}"


__all__ = [
    "BUSINESS_TIMEZONE",
    "EARLIEST_HOUR_SLOT",
    "HOUR_SLOTS",
    "HourSlot",
    "LATEST_DAILY_PATH",
    "LATEST_HOUR_SLOT",
    "business_now",
    "business_today",
    "current_publishable_hour_slot",
    "daily_path",
    "hour_slots_descending_from",
    "hourly_path",
    "normalize_document_date",
    "normalize_input_date",
    "parse_hour_slot",
    "previous_calendar_day",
    "slash_date_to_iso",
]
