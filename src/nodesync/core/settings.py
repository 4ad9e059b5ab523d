"""Reconciler settings.

``NodeSyncSettings`` carries what the wiring layer needs to build a
:class:`~nodesync.reconciler.syncer.NodeSyncer`: which cluster this process
reconciles nodes for, and how to log.

Fields
──────
cluster_name : Owning cluster of every derived record (required)
log_level    : Structlog log level
json_logs    : True for JSON, False for console, None to auto-detect
service_name : ``service.name`` field on every log line

``load_settings()`` is the startup entry point. It raises ``ConfigError``
instead of pydantic's ``ValidationError``.

Examples:
    >>> NodeSyncSettings(cluster_name="local").log_level
    'INFO'

Tags:
    settings, configuration, pydantic, environment, nodesync
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nodesync.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class NodeSyncSettings(BaseSettings):
    """Settings read from ``NODESYNC_*`` environment variables and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="NODESYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    cluster_name: str = Field(min_length=1, description="Owning cluster name")

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    service_name: str = "nodesync"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings(**overrides: object) -> NodeSyncSettings:
    """Build settings from the environment, ``.env`` and ``overrides``.

    Raises:
        ConfigError: If a value is missing or invalid. The pydantic error is
            kept as the cause.
    """
    try:
        return NodeSyncSettings(**overrides)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        message = f"Invalid nodesync settings: {', '.join(fields)}"
        raise ConfigError(message, cause=e).with_context(
            operation="load_settings", invalid_fields=fields
        ) from e


__all__ = ["NodeSyncSettings", "load_settings"]
