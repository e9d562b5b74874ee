"""WSGI front end for a Dispatcher.

Reads one request body, hands it to the dispatcher, and writes whatever the
dispatcher emits. Requests that are not JSON-RPC go to ``fallback`` when one
is given, so the same endpoint can serve other traffic.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from simple_jsonrpc.protocol.envelope import REQUEST_CONTENT_TYPE
from simple_jsonrpc.server import Dispatcher, IncomingRequest

WsgiApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


def _read_body(environ: dict[str, Any]) -> bytes:
    stream = environ.get("wsgi.input")
    if stream is None:
        return b""
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    return stream.read(length) if length > 0 else stream.read()


class JsonRpcWsgiApp:
    """WSGI application serving JSON-RPC over HTTP POST."""

    def __init__(self, dispatcher: Dispatcher, fallback: WsgiApp | None = None) -> None:
        """Initialize the app.

        Args:
            dispatcher: Dispatcher that serves the calls.
            fallback: WSGI app for non-JSON-RPC requests (404 when omitted).
        """
        self.dispatcher = dispatcher
        self.fallback = fallback

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        content_type = environ.get("CONTENT_TYPE")

        # Only consume the body when the dispatcher will look at it
        is_rpc = method == "POST" and content_type == REQUEST_CONTENT_TYPE
        body = _read_body(environ) if is_rpc else b""
        result = self.dispatcher.handle(IncomingRequest(method, content_type, body))

        if not result.handled:
            if self.fallback is not None:
                return self.fallback(environ, start_response)
            start_response("404 Not Found", [("Content-Type", "text/plain")])
            return [b"Not Found"]

        payload = result.body or b""
        headers = [(name, value) for name, value in result.headers.items()]
        headers.append(("Content-Length", str(len(payload))))
        start_response("200 OK", headers)
        return [payload]
