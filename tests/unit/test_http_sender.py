from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from emitlog.collectors.http_client import API_KEY_HEADER, SeqHttpSender
from emitlog.collectors.seq import SeqCollector
from emitlog.core.errors import TransportError
from emitlog.core.events import Event
from emitlog.core.levels import Level

_ENDPOINT = "http://seq.example.com/api/events/raw/"


class _Recorder:
    def __init__(self, response: httpx.Response | Exception | None = None) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response or httpx.Response(201, json={})


def _sender(recorder: _Recorder, **kwargs: Any) -> SeqHttpSender:
    return SeqHttpSender(
        _ENDPOINT, transport=httpx.MockTransport(recorder), **kwargs
    )


def test_posts_body_with_connection_close() -> None:
    recorder = _Recorder()
    response = _sender(recorder).send(b'{"Events":[]}')

    assert response.status_code == 201
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == _ENDPOINT
    assert request.content == b'{"Events":[]}'
    assert request.headers["Connection"] == "close"
    assert request.headers["Content-Type"] == "application/json"
    assert API_KEY_HEADER not in request.headers


def test_api_key_header_when_configured() -> None:
    recorder = _Recorder()
    _sender(recorder, api_key="abc123").send(b"{}")
    assert recorder.requests[0].headers[API_KEY_HEADER] == "abc123"


def test_default_headers_are_merged() -> None:
    recorder = _Recorder()
    _sender(recorder, default_headers={"X-Test": "1"}).send(b"{}")
    assert recorder.requests[0].headers["X-Test"] == "1"


def test_response_body_is_read() -> None:
    recorder = _Recorder(httpx.Response(201, text="accepted"))
    response = _sender(recorder).send(b"{}")
    assert response.is_closed
    assert response.text == "accepted"


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("refused"),
        httpx.ReadError("reset"),
        httpx.ConnectTimeout("timeout"),
    ],
)
def test_transport_failures_raise_transport_error(exc: Exception) -> None:
    with pytest.raises(TransportError) as excinfo:
        _sender(_Recorder(exc)).send(b"{}")
    assert excinfo.value.endpoint == _ENDPOINT
    assert excinfo.value.__cause__ is exc
    assert excinfo.value.cause is exc


def test_error_status_is_reported_not_raised() -> None:
    warnings: list[dict[str, Any]] = []

    def _warn(component: str, message: str, **fields: Any) -> None:
        warnings.append({"component": component, "message": message, **fields})

    with patch("emitlog.core.diagnostics.warn", side_effect=_warn):
        response = _sender(_Recorder(httpx.Response(500, text="boom"))).send(b"{}")

    assert response.status_code == 500
    assert warnings
    assert warnings[0]["component"] == "seq-collector"
    assert warnings[0]["status_code"] == 500
    assert warnings[0]["body"] == "boom"


def test_success_status_is_silent() -> None:
    with patch("emitlog.core.diagnostics.warn") as warn:
        _sender(_Recorder(httpx.Response(201))).send(b"{}")
    warn.assert_not_called()


def test_collector_over_mock_transport() -> None:
    recorder = _Recorder()
    sender = _sender(recorder, api_key="k")
    collector = SeqCollector(server_url="http://seq.example.com", sender=sender)
    event = Event(
        datetime(2014, 7, 8, 9, 10, 11, tzinfo=timezone.utc),
        Level.WARN,
        "The number is {number}",
        {"number": "42"},
    )
    collector.dispatch([event])

    assert len(recorder.requests) == 1
    assert recorder.requests[0].content == (
        b'{"Events":[{"Timestamp":"2014-07-08T09:10:11Z","Level":"Warning",'
        b'"MessageTemplate":"The number is {number}",'
        b'"Properties":{"number":42}}]}'
    )
    assert recorder.requests[0].headers[API_KEY_HEADER] == "k"


def test_collector_surfaces_connection_refused() -> None:
    sender = _sender(_Recorder(httpx.ConnectError("refused")))
    collector = SeqCollector(sender=sender)
    with pytest.raises(TransportError) as excinfo:
        collector.dispatch([])
    assert excinfo.value.batches_sent == 0


def test_timeout_is_applied_to_each_request() -> None:
    recorder = _Recorder()
    _sender(recorder, timeout_seconds=1.5).send(b"{}")
    timeout = recorder.requests[0].extensions["timeout"]
    assert timeout == {"connect": 1.5, "read": 1.5, "write": 1.5, "pool": 1.5}


def test_collector_passes_timeout_to_sender() -> None:
    collector = SeqCollector(server_url="http://seq:5341", timeout_seconds=2.5)
    sender = collector._sender
    assert isinstance(sender, SeqHttpSender)
    assert sender.timeout_seconds == 2.5
    assert SeqCollector()._sender.timeout_seconds == 5.0  # type: ignore[attr-defined]
