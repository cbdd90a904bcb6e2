"""Severity levels and their Seq display names.

Levels follow the ordinals of the classic ``log`` facade: ``ERROR`` is 1 and
``TRACE`` is 5. Ordinal 0 (``OFF``) is a filter value, never a severity that
normal capture produces; it still renders so that a stray event can always
be shipped.

Example:
    >>> severity_name(Level.WARN)
    'Warning'
    >>> severity_name(0)
    'Fatal'
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Level(IntEnum):
    """Event severity ordinal, lower is more severe."""

    OFF = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# 0 is OFF; Fatal is the closest rendering if an event ever carries it.
_SEQ_LEVEL_NAMES: Final[tuple[str, ...]] = (
    "Fatal",
    "Error",
    "Warning",
    "Information",
    "Debug",
    "Verbose",
)

_FALLBACK_NAME: Final[str] = _SEQ_LEVEL_NAMES[Level.OFF]


def severity_name(level: Level | int) -> str:
    """Return the Seq display name for ``level``.

    Never raises: ordinals outside the table render as the fallback name.
    """
    index = int(level)
    if 0 <= index < len(_SEQ_LEVEL_NAMES):
        return _SEQ_LEVEL_NAMES[index]
    return _FALLBACK_NAME
