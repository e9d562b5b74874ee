"""Tests for response validation and result extraction."""

import json
import logging

import pytest

from simple_jsonrpc.errors import EmptyResponse, IdMismatch, RemoteError
from simple_jsonrpc.protocol.interpreter import ResponseInterpreter, ids_match


def _raw(payload) -> bytes:
    return json.dumps(payload).encode()


class TestInterpretSuccess:
    """Tests for successful responses."""

    def test_returns_result(self):
        """Should return the result entry."""
        outcome = ResponseInterpreter(2).interpret(_raw({"id": 1, "result": {"ok": True}}), 1, False)
        assert outcome.result == {"ok": True}

    def test_v1_null_error_is_success(self):
        """A version 1 success carries error: null, which is not an error."""
        outcome = ResponseInterpreter(1).interpret(
            _raw({"id": 2, "result": 5, "error": None}), 2, False
        )
        assert outcome.result == 5

    def test_records_jsonrpc_version(self):
        """Should expose the server's jsonrpc tag when present."""
        outcome = ResponseInterpreter(2).interpret(
            _raw({"jsonrpc": "2.0", "id": 1, "result": 1}), 1, False
        )
        assert outcome.jsonrpc_version == "2.0"

    def test_missing_jsonrpc_is_tolerated(self):
        """Version 2 clients accept servers that omit the tag."""
        outcome = ResponseInterpreter(2).interpret(_raw({"id": 1, "result": 1}), 1, False)
        assert outcome.jsonrpc_version is None
        assert outcome.result == 1

    def test_missing_result_returns_none(self):
        """Should return None when no result entry is present."""
        outcome = ResponseInterpreter(2).interpret(_raw({"id": 1}), 1, False)
        assert outcome.result is None

    def test_notification_short_circuits(self):
        """Should succeed without reading the body for notifications."""
        outcome = ResponseInterpreter(2).interpret(b"garbage", None, True)
        assert outcome.result is True


class TestInterpretFailures:
    """Tests for classified failures and their order."""

    @pytest.mark.parametrize("raw", [None, b"", b"not json", b"[]", b"{}", b"42"])
    def test_empty_response(self, raw):
        """Unusable bodies raise EmptyResponse."""
        with pytest.raises(EmptyResponse):
            ResponseInterpreter(2).interpret(raw, 1, False)

    def test_id_mismatch(self):
        """Should report both ids on mismatch."""
        with pytest.raises(IdMismatch) as exc_info:
            ResponseInterpreter(2).interpret(_raw({"id": 5, "result": 1}), 7, False)
        assert exc_info.value.got == 5
        assert exc_info.value.expected == 7

    def test_id_mismatch_takes_priority_over_error(self):
        """An error meant for another call must not be reported as ours."""
        with pytest.raises(IdMismatch):
            ResponseInterpreter(2).interpret(_raw({"id": 5, "error": "bad"}), 7, False)

    def test_string_id_does_not_match_int(self):
        """Should not coerce types when comparing ids."""
        with pytest.raises(IdMismatch):
            ResponseInterpreter(1).interpret(_raw({"id": "1", "result": 1}), 1, False)

    def test_remote_error(self):
        """Should surface the error payload."""
        with pytest.raises(RemoteError) as exc_info:
            ResponseInterpreter(2).interpret(_raw({"id": 1, "error": "bad"}), 1, False)
        assert exc_info.value.payload == "bad"
        assert '"bad"' in exc_info.value.message

    def test_remote_error_object(self):
        """Should carry structured error objects unchanged."""
        error = {"code": -32601, "message": "Method not found"}
        with pytest.raises(RemoteError) as exc_info:
            ResponseInterpreter(2).interpret(_raw({"id": 1, "error": error}), 1, False)
        assert exc_info.value.payload == error

    @pytest.mark.parametrize("error", [False, 0, ""])
    def test_falsy_error_still_raises(self, error):
        """A present, non-null error counts even when falsy."""
        with pytest.raises(RemoteError):
            ResponseInterpreter(1).interpret(_raw({"id": 1, "result": None, "error": error}), 1, False)


class TestIdsMatch:
    """Tests for strict id comparison."""

    def test_equal_ints(self):
        """Should match identical ints."""
        assert ids_match(3, 3)

    @pytest.mark.parametrize("got", [True, 1.0, "1", None])
    def test_type_differences(self, got):
        """Should reject values that are only loosely equal."""
        assert not ids_match(got, 1)


class TestMissingVersionTag:
    """Tests for the diagnostic on version 2 responses without a tag."""

    def test_v2_logs_missing_tag(self, caplog):
        """Should note a missing jsonrpc tag at debug level."""
        with caplog.at_level(logging.DEBUG, logger="simple_jsonrpc.protocol.interpreter"):
            ResponseInterpreter(2).interpret(_raw({"id": 4, "result": 1}), 4, False)
        assert "no jsonrpc tag" in caplog.text

    def test_v1_does_not_log(self, caplog):
        """Version 1 responses never carry the tag."""
        with caplog.at_level(logging.DEBUG, logger="simple_jsonrpc.protocol.interpreter"):
            ResponseInterpreter(1).interpret(_raw({"id": 4, "result": 1, "error": None}), 4, False)
        assert "no jsonrpc tag" not in caplog.text
