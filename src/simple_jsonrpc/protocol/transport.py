"""HTTP transport for JSON-RPC requests.

The client only needs ``send(body) -> TransportResult``; any object with
that method can stand in for ``HttpTransport``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from simple_jsonrpc.protocol.envelope import REQUEST_CONTENT_TYPE

logger = logging.getLogger(__name__)

USER_AGENT = "simple-jsonrpc/1.0"


@dataclass
class TransportResult:
    """What came back from one send.

    ``error`` is empty when the bytes were delivered.
    """

    body: bytes = b""
    status: int | None = None
    error: str = ""


class Transport(Protocol):
    """Anything that can deliver a request body and return the reply."""

    def send(self, body: bytes) -> TransportResult: ...


class HttpTransport:
    """POSTs JSON-RPC envelopes to a single URL.

    Uses one pooled ``httpx.Client`` for the lifetime of the transport.
    Redirects are not followed unless asked for.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        follow_redirects: bool = False,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            url: Endpoint URL.
            timeout: Request timeout in seconds.
            follow_redirects: Whether to follow HTTP redirects.
            client: Pre-built client to use instead of creating one.
        """
        self.url = url
        self._client = client or httpx.Client(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=follow_redirects,
            timeout=timeout,
        )

    def send(self, body: bytes) -> TransportResult:
        """POST ``body`` and return the raw reply.

        Connection and protocol failures are reported in ``error``; HTTP
        status codes are returned as-is without being treated as failures.
        """
        try:
            response = self._client.post(
                self.url,
                content=body,
                headers={"Content-Type": REQUEST_CONTENT_TYPE},
            )
        except httpx.HTTPError as e:
            logger.warning("POST to %s failed: %s", self.url, e)
            return TransportResult(error=str(e) or type(e).__name__)

        return TransportResult(body=response.content, status=response.status_code)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
