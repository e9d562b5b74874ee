"""Client-side response validation.

Checks run in a fixed order: notification short-circuit, empty body, id
mismatch, remote error, then result extraction. The id check comes before the
error check so that an error addressed to a different call is never reported
as this call's error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from simple_jsonrpc.errors import EmptyResponse, IdMismatch, RemoteError
from simple_jsonrpc.protocol.envelope import VERSION_2, decode_body, validate_version

logger = logging.getLogger(__name__)


@dataclass
class InterpretedResponse:
    """Outcome of a successful call."""

    result: Any
    response: dict[str, Any] | None = None
    jsonrpc_version: str | None = None


def ids_match(got: Any, expected: Any) -> bool:
    """Compare ids by value and JSON type (``1`` does not match ``true`` or ``1.0``)."""
    return type(got) is type(expected) and got == expected


class ResponseInterpreter:
    """Turns a raw response body into a result or a classified error."""

    def __init__(self, version: Any) -> None:
        self.version = validate_version(version)

    def interpret(
        self,
        raw: bytes | str | None,
        expected_id: int | None,
        notifying: bool,
    ) -> InterpretedResponse:
        """Validate a response body against the request it answers.

        Args:
            raw: Raw response body (None when nothing was received).
            expected_id: Correlation id of the outgoing request.
            notifying: Whether the request was a notification.

        Returns:
            InterpretedResponse carrying the result.

        Raises:
            EmptyResponse: If the body is empty or not a JSON object.
            IdMismatch: If the response id differs from ``expected_id``.
            RemoteError: If the response carries a non-null ``error``.
        """
        if notifying:
            return InterpretedResponse(result=True)

        response = decode_body(raw)
        if not response or not isinstance(response, dict):
            raise EmptyResponse()

        got = response.get("id")
        if not ids_match(got, expected_id):
            raise IdMismatch(got, expected_id)

        if response.get("error") is not None:
            raise RemoteError(response["error"])

        # Only version 2 servers send "jsonrpc"; it is informational
        jsonrpc_version = response.get("jsonrpc")
        if jsonrpc_version is None and self.version == VERSION_2:
            logger.debug("Response to request %s has no jsonrpc tag", expected_id)

        return InterpretedResponse(
            result=response.get("result"),
            response=response,
            jsonrpc_version=jsonrpc_version,
        )
