"""
Dispatch metrics for emitlog collectors.

Implements a small set of Prometheus-compatible counters describing what a
collector shipped, truncated, and dropped.

Design goals:
- Thread-safe; ``dispatch`` may run on many threads at once
- Zero global state; each collector gets its own isolated registry
- Safe no-op exporting when disabled, while still tracking in-memory counters
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any

from prometheus_client import CollectorRegistry, Counter


@dataclass
class DispatchMetrics:
    """Captured runtime metrics for quick assertions in tests."""

    events_sent: int = 0
    events_truncated: int = 0
    events_dropped: int = 0
    batches_sent: int = 0
    send_failures: int = 0


class MetricsCollector:
    """Collector-scoped metrics.

    When disabled, Prometheus counters are never created but the in-memory
    ``DispatchMetrics`` is still updated.
    """

    def __init__(self, *, enabled: bool = False) -> None:
        self._enabled = bool(enabled)
        self._lock = threading.Lock()
        self._state = DispatchMetrics()

        self._c_events: Any | None = None
        self._c_truncated: Any | None = None
        self._c_dropped: Any | None = None
        self._c_batches: Any | None = None
        self._c_failures: Any | None = None
        self._registry: CollectorRegistry | None = None

        if self._enabled:
            self._registry = CollectorRegistry()
            self._c_events = Counter(
                "emitlog_events_sent_total",
                "Total number of events delivered in a batch",
                registry=self._registry,
            )
            self._c_truncated = Counter(
                "emitlog_events_truncated_total",
                "Events replaced by an oversize placeholder",
                registry=self._registry,
            )
            self._c_dropped = Counter(
                "emitlog_events_dropped_total",
                "Events too large to ship even as a placeholder",
                registry=self._registry,
            )
            self._c_batches = Counter(
                "emitlog_batches_sent_total",
                "Total number of batch requests completed",
                registry=self._registry,
            )
            self._c_failures = Counter(
                "emitlog_send_failures_total",
                "Batch sends that failed at the transport level",
                registry=self._registry,
            )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def registry(self) -> CollectorRegistry | None:
        """Expose the isolated Prometheus registry when enabled."""
        return self._registry

    def record_batch_sent(self, event_count: int) -> None:
        with self._lock:
            self._state.batches_sent += 1
            self._state.events_sent += event_count
        if self._c_batches is not None:
            self._c_batches.inc()
        if self._c_events is not None and event_count:
            self._c_events.inc(event_count)

    def record_event_truncated(self) -> None:
        with self._lock:
            self._state.events_truncated += 1
        if self._c_truncated is not None:
            self._c_truncated.inc()

    def record_event_dropped(self) -> None:
        with self._lock:
            self._state.events_dropped += 1
        if self._c_dropped is not None:
            self._c_dropped.inc()

    def record_send_failure(self) -> None:
        with self._lock:
            self._state.send_failures += 1
        if self._c_failures is not None:
            self._c_failures.inc()

    def snapshot(self) -> DispatchMetrics:
        with self._lock:
            return replace(self._state)
