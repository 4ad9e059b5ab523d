"""Tests for nodesync.core.settings.

Covers:
- Defaults
- Environment variable override (NODESYNC_ prefix)
- Validation of cluster_name and log_level
- load_settings wrapping validation failures in ConfigError
"""

import pytest
from pydantic import ValidationError

from nodesync.core.errors import ConfigError, ErrorCategory
from nodesync.core.settings import NodeSyncSettings, load_settings


class TestNodeSyncSettingsDefaults:
    def test_defaults(self):
        s = NodeSyncSettings(cluster_name="local")
        assert s.log_level == "INFO"
        assert s.json_logs is None
        assert s.service_name == "nodesync"

    def test_cluster_name_required(self, monkeypatch):
        monkeypatch.delenv("NODESYNC_CLUSTER_NAME", raising=False)
        with pytest.raises(ValidationError):
            NodeSyncSettings(_env_file=None)

    def test_cluster_name_not_empty(self):
        with pytest.raises(ValidationError):
            NodeSyncSettings(cluster_name="")


class TestNodeSyncSettingsEnvOverride:
    def test_cluster_name_from_env(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_CLUSTER_NAME", "c-abc12")
        assert NodeSyncSettings().cluster_name == "c-abc12"

    def test_log_level_from_env_is_normalized(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_LOG_LEVEL", "debug")
        assert NodeSyncSettings(cluster_name="local").log_level == "DEBUG"

    def test_json_logs_from_env(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_JSON_LOGS", "true")
        assert NodeSyncSettings(cluster_name="local").json_logs is True

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            NodeSyncSettings(cluster_name="local")


class TestLoadSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_CLUSTER_NAME", "c-abc12")
        monkeypatch.setenv("NODESYNC_LOG_LEVEL", "warning")

        s = load_settings()

        assert s.cluster_name == "c-abc12"
        assert s.log_level == "WARNING"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_CLUSTER_NAME", "c-abc12")
        assert load_settings(cluster_name="local").cluster_name == "local"

    def test_missing_cluster_name_is_config_error(self, monkeypatch):
        monkeypatch.delenv("NODESYNC_CLUSTER_NAME", raising=False)

        with pytest.raises(ConfigError) as exc_info:
            load_settings(_env_file=None)

        err = exc_info.value
        assert err.category == ErrorCategory.CONFIG
        assert err.retryable is False
        assert err.context.operation == "load_settings"
        assert err.context.metadata["invalid_fields"] == ["cluster_name"]
        assert isinstance(err.cause, ValidationError)

    def test_invalid_log_level_is_config_error(self, monkeypatch):
        monkeypatch.setenv("NODESYNC_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(cluster_name="local")

        assert "log_level" in exc_info.value.message
