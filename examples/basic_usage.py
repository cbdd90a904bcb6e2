"""
Basic usage example for emitlog.

Ships a handful of events to a local Seq server (http://localhost:5341/).
Run a Seq container first, or set EMITLOG_SERVER_URL / EMITLOG_API_KEY.
"""

import logging
import sys

from emitlog import Event, Level, SeqCollector, TransportError, capture


def main() -> int:
    logging.basicConfig(level=logging.INFO)

    collector = SeqCollector.from_settings()

    events = [
        capture(Level.INFO, "Application started on {}", host="web-1"),
        capture(Level.WARN, "User {} exceeded quota of {}!", user="nblumhardt", quota=42),
        capture(Level.DEBUG, "Cache stats {stats}", stats={"hits": 10, "misses": 2}),
    ]

    # Enrich after capture without overwriting what the log site set
    for event in events:
        event.add_property_if_absent("Application", '"emitlog-example"')

    events.append(Event.now(Level.ERROR, "Raw fragment {payload}", {"payload": "[1,2,3]"}))

    try:
        collector.dispatch(events)
    except TransportError as exc:
        print(f"Delivery failed after {exc.batches_sent} batch(es): {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
