"""Tests for nodesync.reconciler.register -- wiring a syncer to an event source."""

import pytest

from nodesync.core.errors import ConfigError
from nodesync.core.settings import NodeSyncSettings
from nodesync.events import InMemoryNodeEventSource
from nodesync.reconciler import NodeSyncer, register


class TestRegister:
    def test_registers_sync_handler(self, record_store, cluster_store, make_node):
        source = InMemoryNodeEventSource()
        syncer = register(
            source, record_store, cluster_store, NodeSyncSettings(cluster_name="local")
        )

        assert isinstance(syncer, NodeSyncer)
        assert syncer.cluster_name == "local"

        source.upsert(make_node("worker-1"))
        assert source.drain().ok
        assert [r.node_name for r in record_store.list()] == ["worker-1"]

    def test_configures_logging_from_settings(
        self, record_store, cluster_store, configure_logging_calls
    ):
        settings = NodeSyncSettings(
            cluster_name="local",
            log_level="debug",
            json_logs=True,
            service_name="nodesync-edge",
        )

        register(InMemoryNodeEventSource(), record_store, cluster_store, settings)

        assert configure_logging_calls == [
            {"level": "DEBUG", "json_format": True, "service": "nodesync-edge"}
        ]

    def test_empty_cluster_name_rejected(self, record_store, cluster_store):
        # model_construct skips validation, as a hand-built settings object would.
        settings = NodeSyncSettings.model_construct(
            cluster_name="", log_level="INFO", json_logs=None, service_name="nodesync"
        )
        source = InMemoryNodeEventSource()

        with pytest.raises(ConfigError) as exc_info:
            register(source, record_store, cluster_store, settings)

        assert exc_info.value.retryable is False
        assert exc_info.value.context.operation == "init"
