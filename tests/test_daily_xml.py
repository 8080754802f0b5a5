from datetime import date

import pytest

from tcmb_rates.errors import ErrorKind, MalformedDocument
from tcmb_rates.ingestion.daily_xml import parse_daily_xml


def test_parse_daily_xml_reads_every_currency(daily_xml: str) -> None:
    rates = parse_daily_xml(daily_xml)

    assert [rate.code for rate in rates] == ["USD", "EUR"]
    usd = rates[0]
    assert usd.name == "ABD DOLARI"
    assert usd.name_en == "US DOLLAR"
    assert usd.unit == 1
    assert usd.forex_buying == 28.6145
    assert usd.forex_selling == 28.6660
    assert usd.banknote_selling == 28.7090
    assert usd.cross_rate_usd is None
    assert rates[1].cross_rate_other == 1.0733


def test_records_carry_bulletin_date(daily_xml: str) -> None:
    rates = parse_daily_xml(daily_xml)

    assert {rate.rate_date for rate in rates} == {date(2023, 9, 14)}
    assert rates[0].effective_date == "09/14/2023"
    assert rates[0].raw["Kod"] == "USD"
    assert rates[0].raw["ForexBuying"] == "28.6145"


def test_blank_quotes_are_none_not_zero() -> None:
    xml = """<?xml version="1.0" encoding="UTF-8"?>
    <Tarih_Date Tarih="19.11.2025" Date="11/19/2025">
      <Currency Kod="XDR" CurrencyCode="XDR">
        <Unit>1</Unit>
        <Isim>OZEL CEKME HAKKI (SDR)</Isim>
        <ForexBuying>56,1234</ForexBuying>
        <ForexSelling></ForexSelling>
        <BanknoteBuying/>
        <BanknoteSelling/>
      </Currency>
    </Tarih_Date>"""

    (sdr,) = parse_daily_xml(xml)

    assert sdr.forex_buying == pytest.approx(56.1234)
    assert sdr.forex_selling is None
    assert sdr.banknote_buying is None
    assert sdr.name_en is None
    assert sdr.has_forex and not sdr.has_banknote


def test_falls_back_to_kod_attribute() -> None:
    xml = """<Tarih_Date Date="01/02/2024">
      <Currency Kod="jpy"><Unit>100</Unit><Isim>JAPON YENI</Isim></Currency>
    </Tarih_Date>"""

    (jpy,) = parse_daily_xml(xml)

    assert jpy.code == "JPY"
    assert jpy.currency_code == "JPY"
    assert jpy.unit == 100
    assert jpy.rate_date == date(2024, 1, 2)


@pytest.mark.parametrize(
    "xml",
    [
        "not valid xml",
        "<root><Currency Kod='USD'/></root>",
        "<Tarih_Date Tarih='14.09.2023'><Currency Kod='USD'/></Tarih_Date>",
        "<Tarih_Date Date='09/14/2023'></Tarih_Date>",
        "<Tarih_Date Date='09/14/2023'><Currency><Isim>X</Isim></Currency></Tarih_Date>",
    ],
)
def test_missing_structure_is_malformed(xml: str) -> None:
    with pytest.raises(MalformedDocument) as excinfo:
        parse_daily_xml(xml)

    assert excinfo.value.kind is ErrorKind.MALFORMED_DOCUMENT
    assert excinfo.value.raw is not None
