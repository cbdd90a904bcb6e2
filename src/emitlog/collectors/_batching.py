"""
Size-bounded batching of formatted event fragments.

Batches are Seq raw-event bodies: ``{"Events":[f1,f2,...]}``. The running
size always includes the closing ``]}`` so a batch is complete the moment it
is flushed. A batch is flushed only once it holds at least one event, which
means a fragment larger than the budget is still shipped on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

HEADER = b'{"Events":['
FOOTER = b"]}"
DELIMITER = b","


@dataclass(frozen=True)
class Batch:
    """A closed request body and the number of events it carries."""

    body: bytes
    event_count: int

    def __len__(self) -> int:
        return len(self.body)


def iter_batches(fragments: Iterable[bytes], batch_limit: int) -> Iterator[Batch]:
    """Group ``fragments`` into batches of at most ``batch_limit`` bytes.

    Fragments are consumed lazily, in order. The final batch is always
    yielded, so an empty input produces one batch with no events.
    """
    buffer = bytearray(HEADER)
    count = len(HEADER) + len(FOOTER)
    delim = b""
    events = 0

    for fragment in fragments:
        cost = len(delim) + len(fragment)
        if delim and count + cost > batch_limit:
            buffer += FOOTER
            yield Batch(bytes(buffer), events)

            buffer = bytearray(HEADER)
            buffer += fragment
            count = len(HEADER) + len(FOOTER) + len(fragment)
            events = 1
        else:
            buffer += delim
            buffer += fragment
            count += cost
            events += 1
        delim = DELIMITER

    buffer += FOOTER
    yield Batch(bytes(buffer), events)


__all__ = ["Batch", "FOOTER", "HEADER", "iter_batches"]
