"""Error taxonomy raised by the tcmb_rates package."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant carried by every :class:`TcmbError`."""

    INVALID_DATE = "invalid_date"
    INVALID_CURRENCY_CODE = "invalid_currency_code"
    MALFORMED_DOCUMENT = "malformed_document"
    TRANSPORT_NOT_FOUND = "transport_not_found"
    TRANSPORT_FAILURE = "transport_failure"
    REQUEST_CANCELLED = "request_cancelled"
    NO_DATA_WITHIN_SEARCH_BOUND = "no_data_within_search_bound"
    RATE_NOT_FOUND = "rate_not_found"


class TcmbError(Exception):
    """Base class for every error surfaced by the package."""

    kind: ErrorKind


class InvalidDate(TcmbError, ValueError):
    """Caller supplied a date or hour that cannot be interpreted."""

    kind = ErrorKind.INVALID_DATE


class InvalidCurrencyCode(TcmbError, ValueError):
    kind = ErrorKind.INVALID_CURRENCY_CODE

    def __init__(self, currency_code: str) -> None:
        super().__init__(f"Invalid currency code: {currency_code!r}")
        self.currency_code = currency_code


class MalformedDocument(TcmbError):
    """A retrieved document does not have the structure of a TCMB bulletin."""

    kind = ErrorKind.MALFORMED_DOCUMENT

    def __init__(self, message: str, *, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class TransportFailure(TcmbError):
    """Network, timeout or non-404 HTTP failure while fetching a document."""

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TransportNotFound(TransportFailure):
    """The feed has no document at the requested path (HTTP 404)."""

    kind = ErrorKind.TRANSPORT_NOT_FOUND

    def __init__(self, url: str) -> None:
        super().__init__(f"No document published at {url}", url=url, status_code=404)


class RequestCancelled(TransportFailure):
    """The caller's cancellation event fired before or during a fetch."""

    kind = ErrorKind.REQUEST_CANCELLED

    def __init__(self, url: str) -> None:
        super().__init__(f"Request to {url} was cancelled", url=url)


class NoDataWithinSearchBound(TcmbError):
    kind = ErrorKind.NO_DATA_WITHIN_SEARCH_BOUND

    def __init__(self, message: str, *, last_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class RateNotFound(TcmbError):
    """A currency or quote field required for a conversion is absent."""

    kind = ErrorKind.RATE_NOT_FOUND


__all__ = [
    "ErrorKind",
    "InvalidCurrencyCode",
    "InvalidDate",
    "MalformedDocument",
    "NoDataWithinSearchBound",
    "RateNotFound",
    "RequestCancelled",
    "TcmbError",
    "TransportFailure",
    "TransportNotFound",
]
