"""Wiring: build a NodeSyncer from settings and attach it to an event source."""

from __future__ import annotations

from nodesync.core.logging import configure_logging, get_logger
from nodesync.core.protocols import ClusterStore, NodeEventSource, RecordStore
from nodesync.core.settings import NodeSyncSettings
from nodesync.reconciler.syncer import NodeSyncer

logger = get_logger(__name__)


def register(
    source: NodeEventSource,
    records: RecordStore,
    clusters: ClusterStore,
    settings: NodeSyncSettings,
) -> NodeSyncer:
    """Register ``NodeSyncer.sync`` as a node handler. Call once at startup.

    Configures process logging from ``settings`` before wiring the syncer.

    Raises:
        ConfigError: If ``settings.cluster_name`` is empty.
    """
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        service=settings.service_name,
    )
    syncer = NodeSyncer(records, clusters, cluster_name=settings.cluster_name)
    source.add_handler(syncer.sync)
    logger.info("node_syncer_registered", cluster_name=settings.cluster_name)
    return syncer


__all__ = ["register"]
