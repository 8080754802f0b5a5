"""Decoder for the TCMB daily bulletin (``today.xml`` / ``YYYYMM/DDMMYYYY.xml``)."""

from __future__ import annotations

from datetime import date

from bs4 import BeautifulSoup
from bs4.element import Tag

from tcmb_rates.errors import MalformedDocument
from tcmb_rates.ingestion.models import RateRecord
from tcmb_rates.utils.dates import slash_date_to_iso
from tcmb_rates.utils.logger import get_logger
from tcmb_rates.utils.numbers import parse_decimal, parse_int

LOGGER = get_logger(__name__)

_FRAGMENT_LIMIT = 200


def _fragment(content: str) -> str:
    return content.strip()[:_FRAGMENT_LIMIT]


def _child_text(node: Tag, name: str) -> str | None:
    child = node.find(name, recursive=False)
    if child is None:
        return None
    return child.get_text(strip=True)


def _raw_fields(node: Tag) -> dict[str, str]:
    fields = {str(key): str(value) for key, value in node.attrs.items()}
    for child in node.find_all(recursive=False):
        fields[child.name] = child.get_text(strip=True)
    return fields


def _parse_currency(node: Tag, rate_date: date, effective_date: str, xml_content: str) -> RateRecord:
    code = node.get("CurrencyCode") or node.get("Kod")
    if not code:
        raise MalformedDocument("Currency entry is missing its CurrencyCode attribute", raw=_fragment(xml_content))
    code = str(code).strip().upper()
    name_en = _child_text(node, "CurrencyName")
    return RateRecord(
        code=code,
        currency_code=code,
        name=_child_text(node, "Isim") or "",
        name_en=name_en or None,
        unit=parse_int(_child_text(node, "Unit"), default=1),
        forex_buying=parse_decimal(_child_text(node, "ForexBuying")),
        forex_selling=parse_decimal(_child_text(node, "ForexSelling")),
        banknote_buying=parse_decimal(_child_text(node, "BanknoteBuying")),
        banknote_selling=parse_decimal(_child_text(node, "BanknoteSelling")),
        cross_rate_usd=parse_decimal(_child_text(node, "CrossRateUSD")),
        cross_rate_other=parse_decimal(_child_text(node, "CrossRateOther")),
        rate_date=rate_date,
        effective_date=effective_date,
        raw=_raw_fields(node),
    )


def parse_daily_xml(xml_content: str) -> list[RateRecord]:
    """Parse a daily bulletin into one :class:`RateRecord` per currency.

    The bulletin looks like::

        <Tarih_Date Tarih="19.11.2025" Date="11/19/2025" Bulten_No="2025/218">
          <Currency CrossOrder="0" Kod="USD" CurrencyCode="USD">
            <Unit>1</Unit>
            <Isim>ABD DOLARI</Isim>
            <CurrencyName>US DOLLAR</CurrencyName>
            <ForexBuying>42.2744</ForexBuying>
            ...
          </Currency>
        </Tarih_Date>

    Every record carries the bulletin's own ``Date``, whatever date the
    caller originally asked for.
    """

    soup = BeautifulSoup(xml_content, "xml")
    root = soup.find("Tarih_Date")
    if root is None:
        raise MalformedDocument("Invalid daily XML structure: missing Tarih_Date node", raw=_fragment(xml_content))

    effective_date = root.get("Date")
    if not effective_date:
        raise MalformedDocument("Invalid daily XML structure: Tarih_Date has no Date attribute", raw=_fragment(xml_content))
    effective_date = str(effective_date).strip()
    try:
        rate_date = date.fromisoformat(slash_date_to_iso(effective_date))
    except ValueError as exc:
        raise MalformedDocument(f"Unrecognised bulletin date {effective_date!r}", raw=_fragment(xml_content)) from exc

    currencies = root.find_all("Currency", recursive=False)
    if not currencies:
        raise MalformedDocument("Invalid daily XML structure: no Currency nodes", raw=_fragment(xml_content))

    records = [_parse_currency(node, rate_date, effective_date, xml_content) for node in currencies]
    LOGGER.debug("Parsed %s daily rates for %s", len(records), rate_date)
    return records


__all__ = ["parse_daily_xml"]
