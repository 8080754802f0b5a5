"""Locale-tolerant numeric parsing shared by the document decoders."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")


def parse_decimal(value: object | None) -> float | None:
    """Parse a TCMB numeric field, accepting ``.`` or ``,`` as decimal separator.

    Blank or unparsable values yield ``None`` so that a missing quote is never
    mistaken for a zero quote.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _WHITESPACE.sub("", str(value))
    if not cleaned:
        return None
    try:
        return float(cleaned.replace(",", "."))
    except ValueError:
        return None


def parse_int(value: object | None, *, default: int) -> int:
    """Parse an integer field, returning ``default`` for blank or bad input."""

    if value is None:
        return default
    cleaned = str(value).strip()
    if not cleaned:
        return default
    try:
        return int(cleaned)
    except ValueError:
        number = parse_decimal(cleaned)
        return int(number) if number is not None else default


__all__ = ["parse_decimal", "parse_int"]
