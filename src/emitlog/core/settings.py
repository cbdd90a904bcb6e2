"""
Environment-driven configuration using Pydantic v2 Settings.

Values are read from ``EMITLOG_*`` environment variables, for example
``EMITLOG_SERVER_URL`` or ``EMITLOG_API_KEY``. The collector itself only
ever sees the immutable ``SeqCollectorConfig`` produced by
``Settings.to_collector_config``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

if TYPE_CHECKING:
    from ..collectors.seq import SeqCollectorConfig

LOCAL_SERVER_URL = "http://localhost:5341/"
DEFAULT_EVENT_BODY_LIMIT_BYTES = 1024 * 256
DEFAULT_BATCH_LIMIT_BYTES = 1024 * 1024 * 10
DEFAULT_TIMEOUT_SECONDS = 5.0


class Settings(BaseSettings):
    """Top-level configuration for emitlog."""

    server_url: str = Field(
        default=LOCAL_SERVER_URL,
        description="Base URL of the Seq server; api/events/raw/ is appended",
    )
    api_key: str | None = Field(
        default=None,
        description="Value sent in the X-Seq-ApiKey header when set",
    )
    event_body_limit_bytes: int = Field(
        default=DEFAULT_EVENT_BODY_LIMIT_BYTES,
        gt=0,
        description="Largest formatted event accepted before a placeholder is sent",
    )
    batch_limit_bytes: int = Field(
        default=DEFAULT_BATCH_LIMIT_BYTES,
        gt=0,
        description="Byte budget for one request body",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0.0,
        description="Per-request network timeout",
    )
    internal_logging_enabled: bool = Field(
        default=True,
        description="Emit WARN/ERROR diagnostics for absorbed failures",
    )
    enable_metrics: bool = Field(
        default=False,
        description="Export Prometheus counters for dispatch activity",
    )

    model_config = SettingsConfigDict(
        env_prefix="EMITLOG_",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("server_url")
    @classmethod
    def _ensure_server_url_non_empty(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("server_url must not be empty")
        return value

    def to_collector_config(self) -> SeqCollectorConfig:
        from ..collectors.seq import SeqCollectorConfig

        return SeqCollectorConfig(
            server_url=self.server_url,
            api_key=self.api_key,
            event_body_limit_bytes=self.event_body_limit_bytes,
            batch_limit_bytes=self.batch_limit_bytes,
            timeout_seconds=self.timeout_seconds,
        )


__all__ = [
    "DEFAULT_BATCH_LIMIT_BYTES",
    "DEFAULT_EVENT_BODY_LIMIT_BYTES",
    "DEFAULT_TIMEOUT_SECONDS",
    "LOCAL_SERVER_URL",
    "Settings",
]
