"""Audit trail for dispatched JSON-RPC calls.

Append-only JSON Lines log of every call the dispatcher serves, plus
protocol-level events such as undecodable request bodies.
"""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Patterns for sensitive argument keys
SENSITIVE_PATTERNS = [
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"auth", re.IGNORECASE),
    re.compile(r"credential", re.IGNORECASE),
    re.compile(r"private[_-]?key", re.IGNORECASE),
]


def _is_sensitive_key(key: str) -> bool:
    return any(pattern.search(key) for pattern in SENSITIVE_PATTERNS)


def _sanitize(value: Any) -> Any:
    """Redact values stored under sensitive keys, at any nesting depth.

    Positional params are a list, so mappings nested in it are walked too.
    """
    if isinstance(value, dict):
        return {
            key: "[REDACTED]" if _is_sensitive_key(str(key)) else _sanitize(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [_sanitize(item) for item in value]
    return value


def _get_timestamp() -> str:
    """Get current UTC timestamp in ISO 8601 format."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class CallAuditLogger:
    """Append-only call log in JSON Lines format.

    The file is flushed after each line.
    """

    def __init__(self, log_path: Path) -> None:
        """Initialize the audit logger.

        Args:
            log_path: Path to the audit log file; parent directories are created.
        """
        self._log_path = log_path
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(log_path, "a", encoding="utf-8")  # noqa: SIM115

    def _write_line(self, data: dict[str, Any]) -> None:
        # default=repr keeps non-JSON params from breaking the log
        self._file.write(json.dumps(data, default=repr) + "\n")
        self._file.flush()

    def log_request(self, request_id: Any, method: str, params: Any) -> None:
        """Log an incoming call.

        Args:
            request_id: The request's id (None for notifications).
            method: Requested method name.
            params: Positional params (sanitized before writing).
        """
        self._write_line(
            {
                "type": "request",
                "timestamp": _get_timestamp(),
                "request_id": request_id,
                "method": method,
                "params": _sanitize(params),
            }
        )

    def log_response(self, request_id: Any, method: str, status: str, duration_ms: float) -> None:
        """Log the outcome of a call.

        Args:
            request_id: Request id to correlate with.
            method: Method name.
            status: "success" or "error".
            duration_ms: Handler time in milliseconds.
        """
        self._write_line(
            {
                "type": "response",
                "timestamp": _get_timestamp(),
                "request_id": request_id,
                "method": method,
                "result_status": status,
                "execution_time_ms": duration_ms,
            }
        )

    def log_protocol_event(self, event_type: str, details: dict[str, Any]) -> None:
        """Log a protocol-level event (malformed request, etc.)."""
        self._write_line(
            {
                "type": "protocol",
                "timestamp": _get_timestamp(),
                "event_type": event_type,
                "details": details,
            }
        )

    def close(self) -> None:
        """Close the log file."""
        if self._file and not self._file.closed:
            self._file.close()

    def __enter__(self) -> CallAuditLogger:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
