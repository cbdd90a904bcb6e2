from __future__ import annotations

import json
import logging

import pytest

from emitlog.core import diagnostics


def test_warn_logs_structured_line(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="emitlog"):
        diagnostics.warn("seq-collector", "server rejected batch", status_code=500)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.name == "emitlog"
    assert record.emitlog_component == "seq-collector"  # type: ignore[attr-defined]
    message = record.getMessage()
    assert message.startswith("[seq-collector] server rejected batch ")
    assert json.loads(message.split(" ", 4)[-1]) == {"status_code": 500}


def test_error_uses_error_level(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="emitlog"):
        diagnostics.error("seq-collector", "oversize event dropped", limit=10)
    assert caplog.records[-1].levelno == logging.ERROR


def test_unserializable_fields_are_stringified(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="emitlog"):
        diagnostics.warn("x", "y", obj=object())
    assert "object object" in caplog.records[-1].getMessage()


def test_disabled_by_settings(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("EMITLOG_INTERNAL_LOGGING_ENABLED", "false")
    with caplog.at_level(logging.WARNING, logger="emitlog"):
        diagnostics.warn("x", "should not appear")
    assert not caplog.records
    assert diagnostics._internal_logging_enabled is False


def test_never_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*args: object, **kwargs: object) -> None:
        raise RuntimeError("handler failure")

    monkeypatch.setattr(diagnostics._logger, "log", _boom)
    diagnostics.warn("x", "y")
