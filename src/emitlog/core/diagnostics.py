"""
Internal diagnostics for non-fatal conditions.

Collectors use ``warn`` and ``error`` to report problems they absorb (an
event dropped for size, a rejected HTTP status) without failing the caller.
Lines go to the stdlib ``emitlog`` logger so applications route them with
their normal logging configuration. Emission never raises.
"""

from __future__ import annotations

import logging
from typing import Any

import orjson

_logger = logging.getLogger("emitlog")

# Cached on first use; tests reset it to None.
_internal_logging_enabled: bool | None = None


def _is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(Settings().internal_logging_enabled)
        except Exception:
            _internal_logging_enabled = True
    return _internal_logging_enabled


def _emit(level: int, component: str, message: str, fields: dict[str, Any]) -> None:
    if not _is_enabled():
        return
    try:
        rendered = orjson.dumps(fields, default=str, option=orjson.OPT_SORT_KEYS)
        _logger.log(
            level,
            "[%s] %s %s",
            component,
            message,
            rendered.decode("utf-8"),
            extra={"emitlog_component": component, "emitlog_fields": fields},
        )
    except Exception:
        # Diagnostics must never break the caller
        pass


def warn(component: str, message: str, **fields: Any) -> None:
    _emit(logging.WARNING, component, message, fields)


def error(component: str, message: str, **fields: Any) -> None:
    _emit(logging.ERROR, component, message, fields)


__all__ = ["error", "warn"]
