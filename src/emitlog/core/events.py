"""
Captured log events.

An ``Event`` is the unit of work handed to a collector. Property values are
stored as already-serialized JSON fragments so that formatting never has to
re-encode them; ``capture_property_value`` is the one place where arbitrary
Python values become fragments.
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

import orjson

from .levels import Level


def capture_property_value(value: Any) -> str:
    """Serialize ``value`` into the JSON fragment carried on events."""
    return orjson.dumps(value, default=_default).decode("utf-8")


def _default(obj: Any) -> Any:
    """Default serializer hook for types orjson does not know."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(exclude_none=True)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def _check_property(name: str, value: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError("Property name must be a non-empty string")
    if not isinstance(value, str):
        raise ValueError(
            f"Property {name!r} must be a serialized JSON string, "
            f"got {type(value).__name__}; use capture_property_value()"
        )


class Event:
    """A single structured log occurrence.

    Everything except the property map is fixed at construction. Properties
    can only grow or be replaced through ``add_or_update_property`` and
    ``add_property_if_absent``.
    """

    __slots__ = ("_timestamp", "_level", "_message_template", "_properties")

    def __init__(
        self,
        timestamp: datetime,
        level: Level | int,
        message_template: str,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        if not isinstance(timestamp, datetime):
            raise ValueError("Timestamp must be a datetime object")
        self._timestamp = _as_utc(timestamp)
        self._level = level if isinstance(level, Level) else _coerce_level(level)
        self._message_template = str(message_template)
        self._properties: dict[str, str] = {}
        for name, value in (properties or {}).items():
            _check_property(name, value)
            self._properties[name] = value

    @classmethod
    def now(
        cls,
        level: Level | int,
        message_template: str,
        properties: Mapping[str, str] | None = None,
    ) -> Event:
        """Create an event stamped with the current UTC time."""
        return cls(datetime.now(timezone.utc), level, message_template, properties)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def level(self) -> Level | int:
        return self._level

    @property
    def message_template(self) -> str:
        return self._message_template

    @property
    def properties(self) -> Mapping[str, str]:
        """Read-only view of the properties, ordered by name."""
        return MappingProxyType(dict(sorted(self._properties.items())))

    def add_or_update_property(self, name: str, value: str) -> None:
        _check_property(name, value)
        self._properties[name] = value

    def add_property_if_absent(self, name: str, value: str) -> None:
        _check_property(name, value)
        self._properties.setdefault(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (
            self._timestamp == other._timestamp
            and int(self._level) == int(other._level)
            and self._message_template == other._message_template
            and self._properties == other._properties
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Event(timestamp={self._timestamp.isoformat()!r}, "
            f"level={self._level!r}, "
            f"message_template={self._message_template!r}, "
            f"properties={dict(self.properties)!r})"
        )


def _coerce_level(level: int) -> Level | int:
    # Unknown ordinals are kept as-is; the level table renders them safely.
    try:
        return Level(level)
    except ValueError:
        return int(level)


__all__ = ["Event", "capture_property_value"]
