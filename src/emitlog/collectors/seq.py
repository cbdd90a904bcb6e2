"""
Seq collector: formats, batches, and POSTs events to a Seq server.

Example:
    from emitlog import Level, SeqCollector, capture

    collector = SeqCollector(server_url="https://seq.example.com", api_key="k")
    collector.dispatch([capture(Level.INFO, "Started {}", app="api")])
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core import diagnostics
from ..core.errors import ConfigurationError, TransportError
from ..core.events import Event
from ..core.serialization import FormatKind, format_event
from ..core.settings import (
    DEFAULT_BATCH_LIMIT_BYTES,
    DEFAULT_EVENT_BODY_LIMIT_BYTES,
    DEFAULT_TIMEOUT_SECONDS,
    LOCAL_SERVER_URL,
    Settings,
)
from ..metrics.metrics import MetricsCollector
from ._batching import iter_batches
from .http_client import SeqHttpSender

RAW_EVENTS_PATH = "api/events/raw/"


class BatchSender(Protocol):
    def send(self, body: bytes) -> Any:  # pragma: no cover - structural protocol
        ...


class SeqCollectorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    server_url: str = LOCAL_SERVER_URL
    api_key: str | None = None
    event_body_limit_bytes: int = Field(default=DEFAULT_EVENT_BODY_LIMIT_BYTES, gt=0)
    batch_limit_bytes: int = Field(default=DEFAULT_BATCH_LIMIT_BYTES, gt=0)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)

    @field_validator("server_url")
    @classmethod
    def _normalize_server_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("server_url must not be empty")
        return value if value.endswith("/") else value + "/"

    @property
    def endpoint(self) -> str:
        return self.server_url + RAW_EVENTS_PATH


def _parse_config(
    config: SeqCollectorConfig | dict[str, Any] | None, **kwargs: Any
) -> SeqCollectorConfig:
    try:
        if isinstance(config, SeqCollectorConfig):
            if not kwargs:
                return config
            return SeqCollectorConfig(**{**config.model_dump(), **kwargs})
        return SeqCollectorConfig(**{**(config or {}), **kwargs})
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid Seq collector configuration: {exc}", cause=exc
        ) from exc


class SeqCollector:
    """Ships events to Seq's raw-events API in size-bounded batches.

    The collector holds only immutable configuration, so one instance can be
    shared across threads. Events from concurrent ``dispatch`` calls may
    interleave on the server in any order.
    """

    name = "seq"

    def __init__(
        self,
        config: SeqCollectorConfig | dict[str, Any] | None = None,
        *,
        metrics: MetricsCollector | None = None,
        sender: BatchSender | None = None,
        **kwargs: Any,
    ) -> None:
        cfg = _parse_config(config, **kwargs)
        self._config = cfg
        self._metrics = metrics
        self._sender: BatchSender = sender or SeqHttpSender(
            cfg.endpoint,
            api_key=cfg.api_key,
            timeout_seconds=cfg.timeout_seconds,
        )

    @classmethod
    def local(cls, **kwargs: Any) -> SeqCollector:
        """Collector for a Seq server on localhost with default limits."""
        return cls(SeqCollectorConfig(server_url=LOCAL_SERVER_URL), **kwargs)

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, **kwargs: Any
    ) -> SeqCollector:
        """Collector configured from ``EMITLOG_*`` environment settings."""
        try:
            settings = settings or Settings()
            cfg = settings.to_collector_config()
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid settings: {exc}", cause=exc) from exc
        if "metrics" not in kwargs and settings.enable_metrics:
            kwargs["metrics"] = MetricsCollector(enabled=True)
        return cls(cfg, **kwargs)

    @property
    def config(self) -> SeqCollectorConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def _fragments(self, events: Iterable[Event]) -> Iterator[bytes]:
        limit = self._config.event_body_limit_bytes
        for event in events:
            outcome = format_event(event, limit)
            if outcome.data is None:
                diagnostics.error(
                    "seq-collector",
                    "oversize event dropped; the size limit is too low for a placeholder",
                    event_body_limit_bytes=limit,
                    message_template=event.message_template[:64],
                )
                if self._metrics is not None:
                    self._metrics.record_event_dropped()
                continue
            if outcome.kind is FormatKind.PLACEHOLDER and self._metrics is not None:
                self._metrics.record_event_truncated()
            yield outcome.data

    def dispatch(self, events: Sequence[Event]) -> None:
        """Format, batch, and send ``events``.

        Raises ``TransportError`` on the first failed send; nothing after it
        is formatted or sent, and batches sent before it stay delivered.
        """
        batches_sent = 0
        for batch in iter_batches(
            self._fragments(events), self._config.batch_limit_bytes
        ):
            try:
                self._sender.send(batch.body)
            except TransportError as exc:
                exc.batches_sent = batches_sent
                diagnostics.warn(
                    "seq-collector",
                    "batch delivery failed",
                    **exc.to_dict(),
                )
                if self._metrics is not None:
                    self._metrics.record_send_failure()
                raise
            batches_sent += 1
            if self._metrics is not None:
                self._metrics.record_batch_sent(batch.event_count)


__all__ = ["RAW_EVENTS_PATH", "SeqCollector", "SeqCollectorConfig"]
