"""Client-side request construction and id assignment."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from simple_jsonrpc.errors import InvalidParams
from simple_jsonrpc.protocol.envelope import RequestEnvelope, request_class, validate_version


@dataclass
class IdCounter:
    """Monotonic request id source owned by one client.

    Not thread-safe: callers sharing a client across threads must serialize
    their calls.
    """

    value: int = 1

    def take(self) -> int:
        """Return the current id and advance the counter by one."""
        current = self.value
        self.value += 1
        return current


@dataclass
class BuiltRequest:
    """A request envelope plus the id its response must carry."""

    envelope: RequestEnvelope
    correlation_id: int | None


class RequestBuilder:
    """Builds version-correct request envelopes."""

    def __init__(self, version: Any) -> None:
        """Initialize the builder.

        Args:
            version: Protocol version (1 or 2).

        Raises:
            ConfigurationError: If the version is not supported.
        """
        self.version = validate_version(version)
        self._envelope_class = request_class(self.version)

    def build(
        self,
        method: str,
        params: Sequence[Any],
        notifying: bool,
        counter: IdCounter,
    ) -> BuiltRequest:
        """Build a request envelope.

        The counter only advances for non-notification calls.

        Args:
            method: Remote method name.
            params: Positional arguments.
            notifying: Build a notification instead of a request.
            counter: The client's id counter.

        Returns:
            The envelope and its correlation id (None for notifications).

        Raises:
            InvalidParams: If the method is not a non-empty string or params
                is not a positional sequence.
        """
        if not isinstance(method, str) or not method:
            raise InvalidParams(
                "Method name must be a non-empty string", details={"method": repr(method)}
            )
        if isinstance(params, Mapping) or isinstance(params, (str, bytes)):
            raise InvalidParams("Params must be given as a positional sequence")
        if not isinstance(params, Sequence):
            raise InvalidParams(
                "Params must be given as a positional sequence",
                details={"type": type(params).__name__},
            )

        correlation_id = None if notifying else counter.take()
        envelope = self._envelope_class(method=method, params=list(params), id=correlation_id)
        return BuiltRequest(envelope=envelope, correlation_id=correlation_id)
