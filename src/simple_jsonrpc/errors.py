"""Exceptions raised by the JSON-RPC client, server, and configuration layers.

Every error carries a human-readable ``message`` and an optional ``details``
dict with the structured values behind it.
"""

from __future__ import annotations

import json
from typing import Any


class JsonRpcError(Exception):
    """Base exception for simple-jsonrpc."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(JsonRpcError):
    """Raised when a client or dispatcher is configured with an invalid protocol version."""

    pass


class ConfigLoadError(ConfigurationError):
    """Raised when a configuration file cannot be loaded or validated."""

    pass


class InvalidParams(JsonRpcError):
    """Raised when a call is made with a bad method name or params shape."""

    pass


class TransportFailure(JsonRpcError):
    """Raised when the transport could not deliver the request."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Cannot connect: {detail}", details={"detail": detail})
        self.detail = detail


class EmptyResponse(JsonRpcError):
    """Raised when the server sent back no usable response body."""

    def __init__(self, message: str = "Server response error: No response.") -> None:
        super().__init__(message)


class IdMismatch(JsonRpcError):
    """Raised when the response id does not match the request id."""

    def __init__(self, got: Any, expected: Any) -> None:
        super().__init__(
            f'Server response error: Incorrect response id of "{got}" '
            f"with request id of {expected}",
            details={"got": got, "expected": expected},
        )
        self.got = got
        self.expected = expected


class RemoteError(JsonRpcError):
    """Raised when the server's response carries an ``error`` entry."""

    def __init__(self, payload: Any) -> None:
        super().__init__(
            f"Server response error: {json.dumps(payload)}.",
            details={"payload": payload},
        )
        self.payload = payload
