"""Configuration loader.

Reads client and server settings from a YAML file. String values may refer to
environment variables with ``${VAR}`` syntax.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from simple_jsonrpc.errors import ConfigLoadError, ConfigurationError
from simple_jsonrpc.protocol.envelope import validate_version


def expand_env_vars(value: str) -> str:
    """Expand environment variables in a string.

    Supports ${VAR_NAME} syntax. Unknown variables are left unchanged.

    Args:
        value: String potentially containing environment variable references.

    Returns:
        String with known environment variables expanded.
    """
    pattern = re.compile(r"\$\{([^}]+)\}")

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if var_name == "HOME":
            return os.path.expanduser("~")
        return match.group(0)

    return pattern.sub(replacer, value)


@dataclass
class RpcConfig:
    """Settings shared by JsonRpcClient.from_config and Dispatcher.from_config."""

    jsonrpc_version: int = 1

    # Client settings
    client_url: str = ""
    client_timeout: float = 10.0
    client_follow_redirects: bool = False
    client_notification: bool = False

    # Server settings
    server_strict_results: bool = False

    # Audit settings
    audit_log_file: str = ""

    @property
    def audit_log_path(self) -> Path | None:
        return Path(self.audit_log_file) if self.audit_log_file else None

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> RpcConfig:
        """Create an RpcConfig from a configuration dictionary.

        Raises:
            ConfigLoadError: If ``jsonrpc_version`` is not 1 or 2.
        """
        client = config.get("client") or {}
        server = config.get("server") or {}
        audit = config.get("audit") or {}

        try:
            jsonrpc_version = validate_version(config.get("jsonrpc_version", 1))
        except ConfigurationError as e:
            raise ConfigLoadError(e.message, e.details) from e

        return cls(
            jsonrpc_version=jsonrpc_version,
            client_url=expand_env_vars(client.get("url", "")),
            client_timeout=float(client.get("timeout", 10.0)),
            client_follow_redirects=bool(client.get("follow_redirects", False)),
            client_notification=bool(client.get("notification", False)),
            server_strict_results=bool(server.get("strict_results", False)),
            audit_log_file=expand_env_vars(audit.get("log_file", "")),
        )


def load_config(path: Path) -> RpcConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        RpcConfig instance.

    Raises:
        ConfigLoadError: If the file cannot be found, parsed, or validated.
    """
    if not path.exists():
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse config YAML: {e}") from e

    if not isinstance(config, dict):
        raise ConfigLoadError("Config must be a YAML mapping")

    return RpcConfig.from_dict(config)
