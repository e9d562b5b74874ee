"""JSON-RPC server-side dispatch.

The dispatcher turns one inbound HTTP request into either a response body or
silence (for notifications). Handler failures always come back as a
JSON-RPC error envelope; they never escape ``Dispatcher.handle``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from simple_jsonrpc.audit import CallAuditLogger
from simple_jsonrpc.protocol.envelope import (
    MAX_MESSAGE_SIZE,
    REQUEST_CONTENT_TYPE,
    RESPONSE_CONTENT_TYPE,
    ResponseEnvelope,
    decode_body,
    encode,
    is_null_id,
    response_class,
    validate_version,
)
from simple_jsonrpc.registry import HandlerArgumentError, HandlerNotFoundError, HandlerRegistry

if TYPE_CHECKING:
    from simple_jsonrpc.config import RpcConfig

logger = logging.getLogger(__name__)

UNKNOWN_METHOD_MESSAGE = "unknown method or incorrect parameters"


@dataclass
class IncomingRequest:
    """The parts of an HTTP request the dispatcher looks at."""

    method: str
    content_type: str | None
    body: bytes = b""


@dataclass
class DispatchResult:
    """Outcome of ``Dispatcher.handle``.

    ``handled`` means the request was JSON-RPC traffic, not that the call
    succeeded. ``body`` is None when nothing should be written back.
    """

    handled: bool
    body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)


def _as_registry(handlers: Any) -> HandlerRegistry:
    if isinstance(handlers, HandlerRegistry):
        return handlers
    if isinstance(handlers, Mapping):
        return HandlerRegistry(handlers)
    return HandlerRegistry.from_object(handlers)


class Dispatcher:
    """Serves JSON-RPC calls against a set of handlers.

    By default a handler signals success by returning a truthy value; a falsy
    return (``None``, ``False``, ``0``, ``""``, ``[]``) is reported to the
    caller as "unknown method or incorrect parameters". Pass
    ``strict_results=True`` to treat every non-raising return as success.
    """

    def __init__(
        self,
        handlers: Any,
        version: Any = 1,
        *,
        strict_results: bool = False,
        audit: CallAuditLogger | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            handlers: A HandlerRegistry, a name -> callable mapping, or an
                object whose public methods are served.
            version: JSON-RPC version (1 or 2).
            strict_results: Treat falsy handler results as success.
            audit: Optional call audit logger.

        Raises:
            ConfigurationError: If the version is not 1 or 2.
        """
        self.version = validate_version(version)
        self.strict_results = strict_results
        self._registry = _as_registry(handlers)
        self._response_class = response_class(self.version)
        self._audit = audit
        self._owns_audit = False

    @classmethod
    def from_config(cls, handlers: Any, config: RpcConfig) -> Dispatcher:
        """Create a dispatcher from loaded configuration.

        Opens the audit log when the configuration names one.
        """
        audit = CallAuditLogger(config.audit_log_path) if config.audit_log_path else None
        dispatcher = cls(
            handlers,
            config.jsonrpc_version,
            strict_results=config.server_strict_results,
            audit=audit,
        )
        dispatcher._owns_audit = audit is not None
        return dispatcher

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def handle(self, request: IncomingRequest) -> DispatchResult:
        """Dispatch one inbound request.

        Only ``POST`` requests with content type ``application/json`` are
        treated as JSON-RPC; anything else is left untouched and reported as
        not handled.

        Args:
            request: The inbound HTTP request.

        Returns:
            DispatchResult with the response body, or no body for
            notifications.
        """
        if request.method != "POST" or request.content_type != REQUEST_CONTENT_TYPE:
            return DispatchResult(handled=False)

        decoded = decode_body(request.body, max_size=MAX_MESSAGE_SIZE)
        envelope = decoded if isinstance(decoded, dict) else {}
        msg_id = envelope.get("id")

        response = self._dispatch(envelope, msg_id)

        if is_null_id(msg_id):
            logger.debug("Notification %r served, no response sent", envelope.get("method"))
            return DispatchResult(handled=True)

        try:
            body = encode(response)
        except (TypeError, ValueError) as e:
            logger.error("Cannot encode response to %r: %s", envelope.get("method"), e)
            body = encode(self._response_class.failure(msg_id, str(e) or UNKNOWN_METHOD_MESSAGE))

        return DispatchResult(
            handled=True,
            body=body,
            headers={"content-type": RESPONSE_CONTENT_TYPE},
        )

    def close(self) -> None:
        """Close the audit log if this dispatcher opened it."""
        if self._owns_audit and self._audit is not None:
            self._audit.close()

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _dispatch(self, envelope: dict[str, Any], msg_id: Any) -> ResponseEnvelope:
        method = envelope.get("method")
        params = envelope.get("params")

        if not isinstance(method, str) or not isinstance(params, list):
            logger.warning("Malformed JSON-RPC request (method=%r)", method)
            if self._audit:
                self._audit.log_protocol_event(
                    "invalid_request",
                    {"request_id": msg_id, "keys": sorted(str(k) for k in envelope)},
                )
            return self._response_class.failure(msg_id, UNKNOWN_METHOD_MESSAGE)

        if self._audit:
            self._audit.log_request(msg_id, method, params)

        start = time.perf_counter()
        response = self._invoke(method, params, msg_id)
        duration_ms = (time.perf_counter() - start) * 1000

        status = "error" if response.failed else "success"
        logger.info("%s id=%r -> %s (%.1f ms)", method, msg_id, status, duration_ms)
        if self._audit:
            self._audit.log_response(msg_id, method, status, duration_ms)
        return response

    def _invoke(self, method: str, params: list[Any], msg_id: Any) -> ResponseEnvelope:
        try:
            result = self._registry.invoke(method, params)
        except (HandlerNotFoundError, HandlerArgumentError) as e:
            logger.info("Rejected call: %s", e)
            return self._response_class.failure(msg_id, UNKNOWN_METHOD_MESSAGE)
        except Exception as e:
            logger.exception("Error handling JSON-RPC method '%s'", method)
            return self._response_class.failure(msg_id, str(e) or UNKNOWN_METHOD_MESSAGE)

        if result or self.strict_results:
            return self._response_class.success(msg_id, result)
        return self._response_class.failure(msg_id, UNKNOWN_METHOD_MESSAGE)


def handle(request: IncomingRequest, handlers: Any, version: Any = 1) -> DispatchResult:
    """One-shot dispatch without keeping a Dispatcher around."""
    return Dispatcher(handlers, version).handle(request)
