"""Tests for the YAML configuration loader."""

import os
from pathlib import Path

import pytest
import yaml

from simple_jsonrpc.config import RpcConfig, expand_env_vars, load_config
from simple_jsonrpc.errors import ConfigLoadError, ConfigurationError


class TestExpandEnvVars:
    """Tests for environment variable expansion."""

    def test_expands_home_variable(self):
        """Should expand ${HOME}."""
        result = expand_env_vars("${HOME}/logs")
        assert result == os.environ.get("HOME", os.path.expanduser("~")) + "/logs"

    def test_expands_custom_variable(self, monkeypatch):
        """Should expand custom environment variables."""
        monkeypatch.setenv("RPC_TEST_HOST", "rpc.internal")
        assert expand_env_vars("http://${RPC_TEST_HOST}/api") == "http://rpc.internal/api"

    def test_leaves_unknown_variables_unchanged(self):
        """Should leave unknown variables as-is."""
        assert expand_env_vars("${UNKNOWN_VAR_12345}/x") == "${UNKNOWN_VAR_12345}/x"


class TestRpcConfig:
    """Tests for RpcConfig.from_dict."""

    def test_defaults(self):
        """Should fill in defaults for a minimal config."""
        config = RpcConfig.from_dict({})

        assert config.jsonrpc_version == 1
        assert config.client_timeout == 10.0
        assert config.client_follow_redirects is False
        assert config.client_notification is False
        assert config.server_strict_results is False
        assert config.audit_log_path is None

    def test_full(self, monkeypatch):
        """Should parse every section."""
        monkeypatch.setenv("RPC_TEST_DIR", "/var/log/rpc")
        config = RpcConfig.from_dict(
            {
                "jsonrpc_version": "2.0",
                "client": {
                    "url": "http://localhost:8080/rpc",
                    "timeout": 3,
                    "follow_redirects": True,
                    "notification": True,
                },
                "server": {"strict_results": True},
                "audit": {"log_file": "${RPC_TEST_DIR}/audit.log"},
            }
        )

        assert config.jsonrpc_version == 2
        assert config.client_url == "http://localhost:8080/rpc"
        assert config.client_timeout == 3.0
        assert config.client_follow_redirects is True
        assert config.client_notification is True
        assert config.server_strict_results is True
        assert config.audit_log_path == Path("/var/log/rpc/audit.log")

    def test_invalid_protocol_version(self):
        """Should raise ConfigLoadError, a ConfigurationError."""
        with pytest.raises(ConfigLoadError) as exc_info:
            RpcConfig.from_dict({"jsonrpc_version": 3})
        assert isinstance(exc_info.value, ConfigurationError)


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_yaml_file(self, tmp_path):
        """Should load a valid file."""
        path = tmp_path / "rpc.yaml"
        path.write_text(yaml.safe_dump({"jsonrpc_version": 2}))

        assert load_config(path).jsonrpc_version == 2

    def test_missing_file(self, tmp_path):
        """Should raise for a missing file."""
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Should raise for unparseable YAML."""
        path = tmp_path / "rpc.yaml"
        path.write_text("jsonrpc_version: [unclosed")
        with pytest.raises(ConfigLoadError, match="parse"):
            load_config(path)

    def test_non_mapping(self, tmp_path):
        """Should raise when the document is not a mapping."""
        path = tmp_path / "rpc.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(path)

    def test_only_known_sections_required(self, tmp_path):
        """Should load a file that only sets client options."""
        path = tmp_path / "rpc.yaml"
        path.write_text("client:\n  url: http://localhost:8080/rpc\n")

        config = load_config(path)
        assert config.jsonrpc_version == 1
        assert config.client_url == "http://localhost:8080/rpc"
        assert not hasattr(config, "version")
