"""
Error types raised by emitlog.

Only failures the caller must act on are exceptions. An event that is too
large even as a placeholder is reported through diagnostics and skipped;
it never surfaces here.
"""

from __future__ import annotations

from typing import Any


class EmitlogError(Exception):
    """Base class for all emitlog errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error.type": type(self).__name__,
            "error.message": self.message,
        }
        if self.cause is not None:
            data["error.cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return data


class ConfigurationError(EmitlogError):
    """Raised when collector or settings values fail validation."""


class TransportError(EmitlogError):
    """A batch could not be delivered because the network exchange failed.

    ``batches_sent`` counts the batches that were delivered by the same
    ``dispatch`` call before this failure. Those batches are not rolled back,
    so retrying the whole call can deliver them twice.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str,
        cause: BaseException | None = None,
        batches_sent: int = 0,
    ) -> None:
        super().__init__(message, cause=cause)
        self.endpoint = endpoint
        self.batches_sent = batches_sent

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["endpoint"] = self.endpoint
        data["batches_sent"] = self.batches_sent
        return data


__all__ = [
    "ConfigurationError",
    "EmitlogError",
    "TransportError",
]
