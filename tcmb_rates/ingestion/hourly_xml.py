"""Decoder for TCMB hourly (reeskont) snapshots.

The hourly feed uses a different document shape than the daily bulletin::

    <tcmbVeri>
      <baslik_bilgi>
        <zaman_etiketi>2026-01-05T10:01:28+03:00</zaman_etiketi>
      </baslik_bilgi>
      <doviz_kur_liste gecerlilik_tarihi="2026-1-5" saat="10:00">
        <kur>
          <doviz_cinsi_tabani>TRY</doviz_cinsi_tabani>
          <doviz_cinsi>USD</doviz_cinsi>
          <birim>1</birim>
          <alis>43,0443</alis>
          <sira_no>1</sira_no>
        </kur>
      </doviz_kur_liste>
    </tcmbVeri>

Quotes use a decimal comma and the validity date is not zero padded.
"""

from __future__ import annotations

from datetime import date

from bs4 import BeautifulSoup
from bs4.element import Tag

from tcmb_rates.errors import InvalidDate, MalformedDocument
from tcmb_rates.ingestion.models import LOCAL_CURRENCY, HourlyRateRecord
from tcmb_rates.utils.dates import HourSlot, normalize_document_date, parse_hour_slot
from tcmb_rates.utils.logger import get_logger
from tcmb_rates.utils.numbers import parse_decimal, parse_int

LOGGER = get_logger(__name__)

_FRAGMENT_LIMIT = 200

CURRENCY_NAMES: dict[str, tuple[str, str]] = {
    "USD": ("ABD Doları", "US Dollar"),
    "EUR": ("Euro", "Euro"),
    "GBP": ("İngiliz Sterlini", "British Pound"),
    "CHF": ("İsviçre Frangı", "Swiss Franc"),
    "XAU": ("Altın", "Gold"),
    "XAS": ("Gümüş", "Silver"),
}


def _fragment(content: str) -> str:
    return content.strip()[:_FRAGMENT_LIMIT]


def _child_text(node: Tag, name: str) -> str | None:
    child = node.find(name, recursive=False)
    if child is None:
        return None
    return child.get_text(strip=True)


def _parse_entry(node: Tag, *, rate_date: date, hour: HourSlot, timestamp: str) -> HourlyRateRecord:
    code = (_child_text(node, "doviz_cinsi") or "").upper()
    name, name_en = CURRENCY_NAMES.get(code, (code, code))
    buying = parse_decimal(_child_text(node, "alis"))
    return HourlyRateRecord(
        code=code,
        currency_code=code,
        name=name,
        name_en=name_en,
        unit=parse_int(_child_text(node, "birim"), default=1),
        buying=buying if buying is not None else 0.0,
        base_currency=_child_text(node, "doviz_cinsi_tabani") or LOCAL_CURRENCY,
        rate_date=rate_date,
        hour=hour,
        timestamp=timestamp,
        order_no=parse_int(_child_text(node, "sira_no"), default=0),
        raw={child.name: child.get_text(strip=True) for child in node.find_all(recursive=False)},
    )


def parse_hourly_xml(xml_content: str) -> list[HourlyRateRecord]:
    """Parse an hourly snapshot; an empty ``doviz_kur_liste`` yields ``[]``."""

    soup = BeautifulSoup(xml_content, "xml")
    root = soup.find("tcmbVeri")
    header = root.find("baslik_bilgi") if root is not None else None
    listing = root.find("doviz_kur_liste") if root is not None else None
    if root is None or header is None or listing is None:
        raise MalformedDocument(
            "Invalid hourly XML structure: missing tcmbVeri, baslik_bilgi or doviz_kur_liste",
            raw=_fragment(xml_content),
        )

    timestamp = _child_text(header, "zaman_etiketi") or ""

    date_attr = listing.get("gecerlilik_tarihi")
    if not date_attr:
        raise MalformedDocument("doviz_kur_liste has no gecerlilik_tarihi attribute", raw=_fragment(xml_content))
    try:
        rate_date = date.fromisoformat(normalize_document_date(str(date_attr)))
    except ValueError as exc:
        raise MalformedDocument(f"Unrecognised validity date {date_attr!r}", raw=_fragment(xml_content)) from exc

    try:
        hour = parse_hour_slot(str(listing.get("saat") or ""))
    except InvalidDate as exc:
        raise MalformedDocument(f"Unrecognised hour slot {listing.get('saat')!r}", raw=_fragment(xml_content)) from exc

    entries = listing.find_all("kur", recursive=False)
    records = [_parse_entry(node, rate_date=rate_date, hour=hour, timestamp=timestamp) for node in entries]
    LOGGER.debug("Parsed %s hourly rates for %s %s", len(records), rate_date, hour.value)
    return records


__all__ = ["CURRENCY_NAMES", "parse_hourly_xml"]
