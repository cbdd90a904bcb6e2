from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..core.events import Event
from .seq import SeqCollector, SeqCollectorConfig


@runtime_checkable
class Collector(Protocol):
    """Destination for captured events.

    Collectors ship a sequence of events to some backend (Seq over HTTP
    today). ``dispatch`` returns normally only when every event that could be
    formatted was delivered; failures propagate to the caller.
    """

    def dispatch(self, events: Sequence[Event]) -> None:  # noqa: D401
        """Ship ``events`` to the collector's destination."""
        ...


__all__ = [
    "Collector",
    "SeqCollector",
    "SeqCollectorConfig",
]
