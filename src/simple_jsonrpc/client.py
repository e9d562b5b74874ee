"""JSON-RPC client.

Usage::

    with JsonRpcClient("http://localhost:8080/rpc", version=2) as client:
        total = client.add(1, 2)          # same as client.call("add", 1, 2)

        client.notification = True
        client.log_event("started")       # fire-and-forget, returns True
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from simple_jsonrpc.errors import InvalidParams, TransportFailure
from simple_jsonrpc.protocol.builder import IdCounter, RequestBuilder
from simple_jsonrpc.protocol.envelope import decode_body, encode, validate_version
from simple_jsonrpc.protocol.interpreter import ResponseInterpreter
from simple_jsonrpc.protocol.transport import HttpTransport, Transport

if TYPE_CHECKING:
    from simple_jsonrpc.config import RpcConfig

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """Calls remote procedures on one JSON-RPC endpoint.

    Request ids start at 1 and advance once per non-notification call for the
    lifetime of the client. The client does no locking; share it across
    threads only with external serialization.
    """

    def __init__(
        self,
        url: str,
        version: Any = 1,
        *,
        transport: Transport | None = None,
        timeout: float = 10.0,
        follow_redirects: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            url: Server URL.
            version: JSON-RPC version (1 or 2).
            transport: Transport to send through (defaults to HttpTransport).
            timeout: HTTP timeout in seconds for the default transport.
            follow_redirects: Whether the default transport follows redirects.

        Raises:
            ConfigurationError: If the version is not 1 or 2.
        """
        self.url = url
        self.request_jsonrpc_version = validate_version(version)
        self._builder = RequestBuilder(self.request_jsonrpc_version)
        self._interpreter = ResponseInterpreter(self.request_jsonrpc_version)
        self._counter = IdCounter()
        self._notification = False
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpTransport(
            url, timeout=timeout, follow_redirects=follow_redirects
        )

        # Diagnostics from the most recent call
        self.last_request: dict[str, Any] | None = None
        self.last_raw_response: bytes | None = None
        self.last_response: dict[str, Any] | None = None
        self.last_status: int | None = None
        self.response_jsonrpc_version: str | None = None

    @classmethod
    def from_config(cls, config: RpcConfig, *, transport: Transport | None = None) -> JsonRpcClient:
        """Create a client from loaded configuration."""
        client = cls(
            config.client_url,
            config.jsonrpc_version,
            transport=transport,
            timeout=config.client_timeout,
            follow_redirects=config.client_follow_redirects,
        )
        client.notification = config.client_notification
        return client

    @property
    def next_id(self) -> int:
        """The id the next non-notification call will use."""
        return self._counter.value

    @property
    def notification(self) -> bool:
        """When True, calls are sent as notifications and return True."""
        return self._notification

    @notification.setter
    def notification(self, value: Any) -> None:
        self._notification = bool(value)

    def set_notification(self, notification: Any) -> None:
        """Switch notification mode on or off."""
        self.notification = notification

    def call(self, method: str, *params: Any) -> Any:
        """Call a remote method with positional arguments.

        Returns:
            The call's result, or True in notification mode.
        """
        return self.request(method, params)

    def request(self, method: str, params: Sequence[Any]) -> Any:
        """Call a remote method with an explicit params sequence.

        Raises:
            InvalidParams: If the method or params are malformed.
            TransportFailure: If the request could not be sent.
            EmptyResponse: If the server returned no usable body.
            IdMismatch: If the response id does not match.
            RemoteError: If the server reported an error.
        """
        notifying = self._notification
        built = self._builder.build(method, params, notifying, self._counter)
        self.last_request = built.envelope.to_dict()
        try:
            body = encode(built.envelope)
        except (TypeError, ValueError) as e:
            raise InvalidParams(f"Params are not JSON-serializable: {e}") from e
        logger.debug("Sending %s to %s: %s", method, self.url, body)

        sent = self._transport.send(body)
        self.last_raw_response = sent.body
        self.last_status = sent.status
        decoded = decode_body(sent.body)
        self.last_response = decoded if isinstance(decoded, dict) else None

        if sent.error:
            raise TransportFailure(sent.error)

        outcome = self._interpreter.interpret(sent.body, built.correlation_id, notifying)
        if outcome.jsonrpc_version is not None:
            self.response_jsonrpc_version = outcome.jsonrpc_version
        return outcome.result

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def remote_method(*params: Any) -> Any:
            return self.call(name, *params)

        remote_method.__name__ = name
        return remote_method

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport and isinstance(self._transport, HttpTransport):
            self._transport.close()

    def __enter__(self) -> JsonRpcClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
