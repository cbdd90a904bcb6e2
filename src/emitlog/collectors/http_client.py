"""
HTTP transport for Seq batches using httpx.

Each send opens a short-lived ``httpx.Client`` and asks the server to close
the connection afterwards, so no connection outlives a request on any path.
"""

from __future__ import annotations

from typing import Mapping

import httpx

from ..core import diagnostics
from ..core.errors import TransportError

API_KEY_HEADER = "X-Seq-ApiKey"


class SeqHttpSender:
    """POSTs finished batch bodies to a Seq raw-events endpoint.

    Only transport-level failures are errors. A response with an error status
    still completes the exchange; it is reported through diagnostics.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        api_key: str | None = None,
        timeout_seconds: float = 5.0,
        default_headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._default_headers = dict(default_headers or {})
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def _headers(self) -> dict[str, str]:
        headers = dict(self._default_headers)
        headers["Connection"] = "close"
        headers["Content-Type"] = "application/json"
        if self._api_key is not None:
            headers[API_KEY_HEADER] = self._api_key
        return headers

    def send(self, body: bytes) -> httpx.Response:
        try:
            with httpx.Client(
                timeout=self._timeout, transport=self._transport
            ) as client:
                # Non-streaming post reads the whole response body
                response = client.post(
                    self._endpoint, content=body, headers=self._headers()
                )
        except httpx.TransportError as exc:
            raise TransportError(
                f"Failed to send batch to {self._endpoint}: {exc}",
                endpoint=self._endpoint,
                cause=exc,
            ) from exc

        if response.status_code >= 400:
            diagnostics.warn(
                "seq-collector",
                "server rejected batch",
                status_code=response.status_code,
                endpoint=self._endpoint,
                body=response.text[:256],
            )
        return response


__all__ = ["API_KEY_HEADER", "SeqHttpSender"]
