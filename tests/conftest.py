"""Shared fixtures for client and server tests."""

import json

import pytest

from simple_jsonrpc.protocol.transport import TransportResult
from simple_jsonrpc.registry import HandlerRegistry


class ScriptedTransport:
    """Transport double that records sent bodies and replays canned replies."""

    def __init__(self, replies=None):
        self.sent: list[bytes] = []
        self.replies = list(replies or [])

    def reply_with(self, payload, status=200):
        """Queue a reply; dicts are JSON-encoded."""
        body = json.dumps(payload).encode() if isinstance(payload, dict) else payload
        self.replies.append(TransportResult(body=body, status=status))

    def fail_with(self, error):
        self.replies.append(TransportResult(error=error))

    def send(self, body: bytes) -> TransportResult:
        self.sent.append(body)
        if self.replies:
            return self.replies.pop(0)
        return TransportResult(body=b"", status=200)

    def sent_envelopes(self):
        return [json.loads(body) for body in self.sent]


class Calculator:
    """Handler object used to exercise object-based registration."""

    def add(self, a, b):
        return a + b

    def echo(self, value):
        return value

    def fail(self):
        raise RuntimeError("calculator is broken")

    def _hidden(self):
        return "should not be exposed"


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def registry() -> HandlerRegistry:
    """Registry with a handful of handlers covering success and failure paths."""
    reg = HandlerRegistry()
    reg.register("ping", lambda: True)
    reg.register("echo", lambda value: value)
    reg.register("add", lambda a, b: a + b)
    reg.register("zero", lambda: 0)

    def explode():
        raise ValueError("handler exploded")

    reg.register("explode", explode)
    return reg


@pytest.fixture
def calculator() -> Calculator:
    return Calculator()
