import pytest

from tcmb_rates.utils.numbers import parse_decimal, parse_int


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("43,0443", 43.0443),
        ("6115,17", 6115.17),
        ("0,99", 0.99),
        ("28.6145", 28.6145),
        (" 1 234,5 ", 1234.5),
        (12, 12.0),
    ],
)
def test_parse_decimal_accepts_both_separators(raw, expected) -> None:
    assert parse_decimal(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "   ", "n/a", True])
def test_parse_decimal_returns_none_for_missing_values(raw) -> None:
    assert parse_decimal(raw) is None


def test_parse_int_defaults() -> None:
    assert parse_int("100", default=1) == 100
    assert parse_int("", default=1) == 1
    assert parse_int(None, default=0) == 0
    assert parse_int("abc", default=7) == 7
