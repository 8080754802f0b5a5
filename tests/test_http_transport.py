import time
from threading import Event, Timer
from unittest.mock import Mock

import pytest
import requests

from tcmb_rates.errors import RequestCancelled, TransportFailure, TransportNotFound
from tcmb_rates.ingestion.http_transport import RequestsTransport

URL = "https://www.tcmb.gov.tr/kurlar/today.xml"


class DummyResponse:
    def __init__(self, status_code: int = 200, chunks=None, headers=None) -> None:
        self.status_code = status_code
        self.ok = status_code < 400
        self.headers = headers or {}
        self._chunks = chunks or []
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        yield from self._chunks

    def close(self) -> None:
        self.closed = True


def _transport(session: Mock, **kwargs) -> RequestsTransport:
    return RequestsTransport(session=session, max_attempts=3, backoff_seconds=0, **kwargs)


def _session(*outcomes) -> Mock:
    session = Mock()
    session.headers = {}
    session.get.side_effect = list(outcomes)
    return session


def test_fetch_text_returns_decoded_body() -> None:
    response = DummyResponse(chunks=[b"<?xml version='1.0'?>", "<a>Altın</a>".encode("utf-8")])
    session = _session(response)

    body = _transport(session).fetch_text(URL)

    assert body == "<?xml version='1.0'?><a>Altın</a>"
    assert response.closed
    session.get.assert_called_once_with(URL, timeout=10.0, stream=True)
    assert "User-Agent" in session.headers


def test_fetch_text_honours_declared_charset() -> None:
    response = DummyResponse(
        chunks=["Gümüş".encode("iso-8859-9")],
        headers={"Content-Type": "text/xml; charset=ISO-8859-9"},
    )

    assert _transport(_session(response)).fetch_text(URL) == "Gümüş"


def test_404_maps_to_not_found_without_retry() -> None:
    session = _session(DummyResponse(status_code=404))

    with pytest.raises(TransportNotFound) as excinfo:
        _transport(session).fetch_text(URL)

    assert excinfo.value.status_code == 404
    assert excinfo.value.url == URL
    assert session.get.call_count == 1


def test_server_error_maps_to_transport_failure() -> None:
    session = _session(DummyResponse(status_code=503))

    with pytest.raises(TransportFailure) as excinfo:
        _transport(session).fetch_text(URL)

    assert not isinstance(excinfo.value, TransportNotFound)
    assert excinfo.value.status_code == 503
    assert session.get.call_count == 1


def test_connection_errors_are_retried() -> None:
    session = _session(
        requests.ConnectionError("reset"),
        requests.Timeout("slow"),
        DummyResponse(chunks=[b"<ok/>"]),
    )

    assert _transport(session).fetch_text(URL) == "<ok/>"
    assert session.get.call_count == 3


def test_exhausted_retries_raise_transport_failure() -> None:
    session = _session(*[requests.ConnectionError("down")] * 3)

    with pytest.raises(TransportFailure) as excinfo:
        _transport(session).fetch_text(URL)

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert session.get.call_count == 3


def test_cancelled_before_request() -> None:
    session = _session()
    event = Event()
    event.set()

    with pytest.raises(RequestCancelled):
        _transport(session).fetch_text(URL, cancel_event=event)

    session.get.assert_not_called()


def test_cancelled_while_streaming() -> None:
    event = Event()

    class CancellingResponse(DummyResponse):
        def iter_content(self, chunk_size: int = 1):
            yield b"<Tarih_Date>"
            event.set()
            yield b"</Tarih_Date>"

    response = CancellingResponse()

    with pytest.raises(RequestCancelled):
        _transport(_session(response)).fetch_text(URL, cancel_event=event)

    assert response.closed


def test_unknown_charset_falls_back_to_utf8() -> None:
    response = DummyResponse(
        chunks=["<a>Altın</a>".encode("utf-8")],
        headers={"Content-Type": "text/xml; charset=bogus-enc"},
    )

    assert _transport(_session(response)).fetch_text(URL) == "<a>Altın</a>"


def test_cancel_interrupts_retry_backoff() -> None:
    session = Mock()
    session.headers = {}
    session.get.side_effect = requests.ConnectionError("down")
    transport = RequestsTransport(session=session, max_attempts=5, backoff_seconds=2)
    event = Event()
    timer = Timer(0.1, event.set)

    started = time.monotonic()
    timer.start()
    try:
        with pytest.raises(RequestCancelled):
            transport.fetch_text(URL, cancel_event=event)
    finally:
        timer.cancel()

    assert time.monotonic() - started < 1.0
    assert session.get.call_count == 1
