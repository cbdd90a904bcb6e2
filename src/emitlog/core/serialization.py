"""
Formatting of events into Seq raw-event JSON fragments.

Fragments are assembled as bytes so that their length is the wire length.
String fields (timestamp, level, template) are escaped with orjson; property
values are already JSON and are copied in verbatim, as are property names,
which are plain identifiers by construction.

Example fragment::

    {"Timestamp":"2014-07-08T09:10:11Z","Level":"Warning",
     "MessageTemplate":"The number is {number}","Properties":{"number":42}}
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import orjson

from .events import Event
from .levels import severity_name

PLACEHOLDER_TARGET = "emitlog.collectors.seq"
PLACEHOLDER_INITIAL_CHARS = 64


def format_timestamp(timestamp: datetime) -> str:
    """Render a UTC timestamp as ``YYYY-MM-DDTHH:MM:SSZ``, year zero-padded."""
    return (
        f"{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}"
        f"T{timestamp.hour:02d}:{timestamp.minute:02d}:{timestamp.second:02d}Z"
    )


class FormatKind(str, Enum):
    NORMAL = "normal"
    PLACEHOLDER = "placeholder"
    DROPPED = "dropped"


@dataclass(frozen=True)
class FormatOutcome:
    """Result of formatting one event against the per-event byte limit."""

    kind: FormatKind
    data: bytes | None = None

    @property
    def dropped(self) -> bool:
        return self.kind is FormatKind.DROPPED


def _header(event: Event, message_template: str) -> bytes:
    return b"".join(
        (
            b'{"Timestamp":',
            orjson.dumps(format_timestamp(event.timestamp)),
            b',"Level":',
            orjson.dumps(severity_name(event.level)),
            b',"MessageTemplate":',
            orjson.dumps(message_template),
            b',"Properties":{',
        )
    )


def format_payload(event: Event) -> bytes:
    """Render the full fragment for ``event``."""
    properties = b",".join(
        b'"' + name.encode("utf-8") + b'":' + value.encode("utf-8")
        for name, value in event.properties.items()
    )
    return _header(event, event.message_template) + properties + b"}}"


def format_oversize_placeholder(event: Event) -> bytes:
    """Render the reduced record sent in place of an oversized event."""
    initial = event.message_template[:PLACEHOLDER_INITIAL_CHARS]
    properties = b"".join(
        (
            b'"target":',
            orjson.dumps(PLACEHOLDER_TARGET),
            b',"initial":',
            orjson.dumps(initial),
        )
    )
    return _header(event, f"(Event too large) {initial}...") + properties + b"}}"


def format_event(event: Event, event_body_limit: int) -> FormatOutcome:
    """Format ``event``, degrading to a placeholder or dropping it on size."""
    payload = format_payload(event)
    if len(payload) <= event_body_limit:
        return FormatOutcome(FormatKind.NORMAL, payload)
    placeholder = format_oversize_placeholder(event)
    if len(placeholder) <= event_body_limit:
        return FormatOutcome(FormatKind.PLACEHOLDER, placeholder)
    return FormatOutcome(FormatKind.DROPPED)


__all__ = [
    "PLACEHOLDER_TARGET",
    "FormatKind",
    "FormatOutcome",
    "format_event",
    "format_oversize_placeholder",
    "format_payload",
    "format_timestamp",
]
