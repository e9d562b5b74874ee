"""JSON-RPC 1.0 and 2.0 envelope shapes.

Each protocol version gets its own request and response dataclass. The
variants share their fields and differ only in which keys ``to_dict`` puts on
the wire:

============  ===========================  ===============================
              version 1                    version 2
============  ===========================  ===============================
request       ``id`` always (null for a    ``jsonrpc: "2.0"``; ``id``
              notification)                omitted for a notification
response      ``result`` and ``error``     ``jsonrpc: "2.0"`` and exactly
              both present, one null       one of ``result``/``error``
============  ===========================  ===============================
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from simple_jsonrpc.errors import ConfigurationError

VERSION_1 = 1
VERSION_2 = 2
SUPPORTED_VERSIONS = (VERSION_1, VERSION_2)

JSONRPC_2_TAG = "2.0"

REQUEST_CONTENT_TYPE = "application/json"
RESPONSE_CONTENT_TYPE = "text/javascript"

# Loosely-typed clients sometimes send these instead of a JSON null
NULL_ID_STRINGS = ("NULL", "null")

# Maximum accepted request body (1 MB)
MAX_MESSAGE_SIZE = 1_048_576


def validate_version(version: Any) -> int:
    """Normalize a protocol version to 1 or 2.

    Accepts ints, floats, and strings such as ``"2.0"``.

    Raises:
        ConfigurationError: If the value is not version 1 or 2.
    """
    if isinstance(version, bool):
        raise ConfigurationError("JSON-RPC version must be 1.0 or 2.0")
    try:
        number = float(version)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("JSON-RPC version must be 1.0 or 2.0") from e
    if number not in SUPPORTED_VERSIONS:
        raise ConfigurationError(
            "JSON-RPC version must be 1.0 or 2.0", details={"version": version}
        )
    return int(number)


def is_null_id(msg_id: Any) -> bool:
    """Return True for ids that mark a request as a notification."""
    return msg_id is None or msg_id in NULL_ID_STRINGS


@dataclass
class RequestEnvelope:
    """Fields shared by both request versions."""

    method: str
    params: list[Any] = field(default_factory=list)
    id: int | None = None

    version = 0

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass
class V1Request(RequestEnvelope):
    """JSON-RPC 1.0 request. Notifications carry ``"id": null``."""

    version = VERSION_1

    def to_dict(self) -> dict[str, Any]:
        return {"method": self.method, "params": self.params, "id": self.id}


@dataclass
class V2Request(RequestEnvelope):
    """JSON-RPC 2.0 request. Notifications carry no ``id`` key at all."""

    version = VERSION_2

    def to_dict(self) -> dict[str, Any]:
        request: dict[str, Any] = {
            "jsonrpc": JSONRPC_2_TAG,
            "method": self.method,
            "params": self.params,
        }
        if self.id is not None:
            request["id"] = self.id
        return request


@dataclass
class ResponseEnvelope:
    """Fields shared by both response versions.

    ``payload`` is the result on success and the error value on failure.
    """

    id: Any
    payload: Any
    failed: bool = False

    version = 0

    @classmethod
    def success(cls, msg_id: Any, result: Any) -> ResponseEnvelope:
        return cls(id=msg_id, payload=result, failed=False)

    @classmethod
    def failure(cls, msg_id: Any, error: Any) -> ResponseEnvelope:
        return cls(id=msg_id, payload=error, failed=True)

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass
class V1Response(ResponseEnvelope):
    """JSON-RPC 1.0 response: ``result`` and ``error`` are always both present."""

    version = VERSION_1

    def to_dict(self) -> dict[str, Any]:
        if self.failed:
            return {"id": self.id, "result": None, "error": self.payload}
        return {"id": self.id, "result": self.payload, "error": None}


@dataclass
class V2Response(ResponseEnvelope):
    """JSON-RPC 2.0 response: exactly one of ``result``/``error``."""

    version = VERSION_2

    def to_dict(self) -> dict[str, Any]:
        key = "error" if self.failed else "result"
        return {"id": self.id, key: self.payload, "jsonrpc": JSONRPC_2_TAG}


def request_class(version: int) -> type[RequestEnvelope]:
    """Return the request envelope class for a validated version."""
    return V2Request if version == VERSION_2 else V1Request


def response_class(version: int) -> type[ResponseEnvelope]:
    """Return the response envelope class for a validated version."""
    return V2Response if version == VERSION_2 else V1Response


def encode(envelope: RequestEnvelope | ResponseEnvelope) -> bytes:
    """Serialize an envelope to UTF-8 JSON bytes.

    Raises:
        TypeError: If the envelope holds a value JSON cannot represent.
        ValueError: If it holds NaN or an infinity.
    """
    return json.dumps(envelope.to_dict(), allow_nan=False).encode("utf-8")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_body(raw: bytes | str | None, max_size: int | None = None) -> Any:
    """Decode a JSON body, returning None when it is empty or unparseable.

    ``NaN`` and ``Infinity`` are not JSON and make the body unparseable.

    Args:
        raw: Raw body bytes or text.
        max_size: Optional size limit in bytes; larger bodies decode to None.

    Returns:
        The decoded JSON value, or None.
    """
    if not raw:
        return None
    if max_size is not None and len(raw) > max_size:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return None
