"""
Explicit capture of message templates and their properties.

Log sites name each property when they call ``capture``; positional ``{}``
holes in the template are rewritten to ``{name}`` in argument order.

Example:
    >>> event = capture(Level.WARN, "User {} exceeded quota of {}!",
    ...                 user="nblumhardt", quota=42)
    >>> event.message_template
    'User {user} exceeded quota of {quota}!'
    >>> dict(event.properties)
    {'quota': '42', 'user': '"nblumhardt"'}
"""

from __future__ import annotations

from typing import Any, Iterable

from .events import Event, capture_property_value
from .levels import Level

_HOLE = "{}"


def build_template(template: str, names: Iterable[str]) -> str:
    """Name the positional holes of ``template``, left to right.

    Holes beyond the supplied names are left untouched, as are names with no
    hole left to fill.
    """
    out: list[str] = []
    rest = template
    for name in names:
        head, sep, tail = rest.partition(_HOLE)
        if not sep:
            break
        out.append(head)
        out.append("{" + name + "}")
        rest = tail
    out.append(rest)
    return "".join(out)


def capture(level: Level | int, template: str, /, **values: Any) -> Event:
    """Build an event stamped now, serializing each named value."""
    properties = {name: capture_property_value(v) for name, v in values.items()}
    return Event.now(level, build_template(template, values), properties)


__all__ = ["build_template", "capture"]
