"""``requests`` backed implementation of :class:`FeedTransport`."""

from __future__ import annotations

import codecs
from threading import Event

import requests
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    stop_when_event_set,
    wait_exponential,
)
from tenacity.nap import sleep as default_sleep

from tcmb_rates.errors import RequestCancelled, TransportFailure, TransportNotFound
from tcmb_rates.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_USER_AGENT = "tcmb-rates/0.1 (+https://www.tcmb.gov.tr/kurlar)"
_CHUNK_SIZE = 16 * 1024


class RequestsTransport:
    """Fetch feed documents over HTTP.

    Connection errors and timeouts are retried with exponential backoff.
    HTTP status codes are never retried: a 404 is an answer, not a fault.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
            }
        )
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds

    def fetch_text(self, url: str, *, cancel_event: Event | None = None) -> str:
        _raise_if_cancelled(url, cancel_event)
        stop = stop_after_attempt(self.max_attempts)
        sleep = default_sleep
        if cancel_event is not None:
            # Backoff waits on the event so a cancel interrupts it.
            stop = stop | stop_when_event_set(cancel_event)
            sleep = cancel_event.wait
        retrying = Retrying(
            stop=stop,
            sleep=sleep,
            wait=wait_exponential(multiplier=self.backoff_seconds, max=30),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            reraise=True,
        )
        try:
            response = retrying(self._get, url, cancel_event)
        except RequestCancelled:
            raise
        except requests.RequestException as exc:
            _raise_if_cancelled(url, cancel_event)
            raise TransportFailure(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            if response.status_code == 404:
                raise TransportNotFound(url)
            if not response.ok:
                raise TransportFailure(
                    f"TCMB responded with HTTP {response.status_code} for {url}",
                    url=url,
                    status_code=response.status_code,
                )
            body = self._read_body(response, url, cancel_event)
        except requests.RequestException as exc:
            raise TransportFailure(f"Reading {url} failed: {exc}", url=url) from exc
        finally:
            response.close()

        LOGGER.debug("Fetched %s (%s bytes)", url, len(body))
        return body.decode(_charset(response), errors="replace")

    def _get(self, url: str, cancel_event: Event | None) -> requests.Response:
        _raise_if_cancelled(url, cancel_event)
        return self.session.get(url, timeout=self.timeout, stream=True)

    @staticmethod
    def _read_body(response: requests.Response, url: str, cancel_event: Event | None) -> bytes:
        chunks: list[bytes] = []
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            _raise_if_cancelled(url, cancel_event)
            if chunk:
                chunks.append(chunk)
        return b"".join(chunks)


def _raise_if_cancelled(url: str, cancel_event: Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelled(url)


def _charset(response: requests.Response) -> str:
    content_type = response.headers.get("Content-Type", "")
    for part in content_type.split(";"):
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            charset = value.strip("\"'")
            try:
                codecs.lookup(charset)
            except LookupError:
                LOGGER.warning("Unknown charset %r, decoding as utf-8", charset)
                return "utf-8"
            return charset
    return "utf-8"


__all__ = ["DEFAULT_USER_AGENT", "RequestsTransport"]
