"""
Node syncer: converges derived ``ClusterNode`` records onto observed nodes.

Manifesto:
    Events arrive at least once, in any order across nodes, and may be
    redelivered after a failure. Every ``sync`` must therefore be safe to
    repeat: it decides from current state alone and retries nothing itself.

Architecture:
    ::

        sync(key, change)
          │
          ├── NodeIndex.get(key) ─────────────── existing record or None
          │
          ├── Removed  ─┬─ existing  → DELETE records.delete(existing.name)
          │             └─ None      → NO-OP  (already deleted)
          │
          └── Observed ─── clusters.get(cluster_name)
                        ├─ None      → CREATE (rejected if cluster removing)
                        └─ existing  → UPDATE (overlay store/accounting fields)

    State machine over (existing?, change):

        ┌───────────┬──────────┬─────────┐
        │ existing? │ change   │ action  │
        ├───────────┼──────────┼─────────┤
        │ no        │ Observed │ CREATE  │
        │ yes       │ Observed │ UPDATE  │
        │ yes       │ Removed  │ DELETE  │
        │ no        │ Removed  │ NO-OP   │
        └───────────┴──────────┴─────────┘

Field ownership on UPDATE:
    The freshly projected record replaces spec, status mirror, labels and
    annotations wholesale. ``resource_version``, ``name``, ``uid``,
    ``owner_references``, ``status.requested`` and ``status.limits`` are
    carried over from the existing record unchanged.

Concurrency:
    Different node keys may be synced concurrently; the only shared state
    is the lock-protected NodeIndex. The same key is assumed to be
    serialized by the event source. The window between lookup and write is
    closed by the store's resource-version check, not by locking.

Examples:
    >>> syncer = NodeSyncer(records, clusters, cluster_name="local")
    >>> syncer.sync("worker-1", Observed(node))
    >>> syncer.sync("worker-1", Removed())

Tags:
    reconciler, convergence, idempotent, nodesync
"""

from __future__ import annotations

import copy

from nodesync.core.errors import (
    ClusterLookupError,
    ClusterRemovingError,
    ConfigError,
    NodeSyncError,
    NotFoundError,
    ReconcileError,
)
from nodesync.core.logging import LogContext, get_logger
from nodesync.core.protocols import ClusterStore, RecordStore
from nodesync.models import Cluster, ClusterNode, Node, NodeChange, Observed, Removed
from nodesync.reconciler.index import NodeIndex
from nodesync.reconciler.projection import project_node

logger = get_logger(__name__)


class NodeSyncer:
    """Keeps one ``ClusterNode`` per observed node of ``cluster_name``.

    Args:
        records: Store of derived records
        clusters: Store of cluster identity records
        cluster_name: Cluster that owns every record this syncer writes
        index: Optional pre-built NodeIndex over ``records``

    Raises:
        ConfigError: If ``cluster_name`` is empty.
    """

    def __init__(
        self,
        records: RecordStore,
        clusters: ClusterStore,
        cluster_name: str,
        index: NodeIndex | None = None,
    ):
        if not cluster_name:
            raise ConfigError("cluster_name is required").with_context(operation="init")
        self.records = records
        self.clusters = clusters
        self.cluster_name = cluster_name
        self.index = index or NodeIndex(records)

    def sync(self, key: str, change: NodeChange) -> None:
        """Reconcile the derived record for node ``key``.

        Raises:
            NodeSyncError: Any failure. ``retryable`` tells the event source
                whether redelivery can help.
        """
        with LogContext(node_name=key, cluster_name=self.cluster_name):
            try:
                if isinstance(change, Removed):
                    self._delete_cluster_node(key)
                elif isinstance(change, Observed):
                    self._create_or_update_cluster_node(change.node)
                else:
                    raise TypeError(f"Unsupported node change: {change!r}")
            except NodeSyncError as e:
                if e.context.node_name is None:
                    e.context.node_name = key
                log = logger.warning if e.retryable else logger.error
                log("node_sync_failed", **e.to_dict())
                raise

    # -- DELETE ------------------------------------------------------------

    def _delete_cluster_node(self, node_name: str) -> None:
        existing = self.index.get(node_name)
        if existing is None:
            logger.info("cluster_node_already_deleted", node_name=node_name)
            return

        logger.info("cluster_node_deleting", node_name=node_name, record_name=existing.name)
        try:
            self.records.delete(existing.name)
        except NotFoundError:
            logger.info("cluster_node_already_deleted", node_name=node_name)
        except Exception as e:
            self.index.invalidate()
            raise ReconcileError(
                f"Failed to delete cluster node [{node_name}]",
                node_name=node_name,
                operation="delete",
                cause=e,
            ) from e
        else:
            logger.info("cluster_node_deleted", node_name=node_name)
        self.index.discard(node_name)

    # -- CREATE / UPDATE ---------------------------------------------------

    def _create_or_update_cluster_node(self, node: Node) -> None:
        existing = self.index.get(node.name)
        cluster = self._get_cluster()

        if existing is None:
            self._create_cluster_node(node, cluster)
        else:
            self._update_cluster_node(node, cluster, existing)

    def _get_cluster(self) -> Cluster:
        try:
            return self.clusters.get(self.cluster_name)
        except Exception as e:
            raise ClusterLookupError(self.cluster_name, cause=e) from e

    def _create_cluster_node(self, node: Node, cluster: Cluster) -> None:
        if cluster.is_removing:
            raise ClusterRemovingError(self.cluster_name, node_name=node.name)

        record = project_node(node, cluster, self.cluster_name)
        record.status.requested = {}
        record.status.limits = {}

        logger.info("cluster_node_creating", node_name=node.name)
        try:
            created = self.records.create(record)
        except Exception as e:
            self.index.invalidate()
            raise ReconcileError(
                f"Failed to create cluster node [{node.name}]",
                node_name=node.name,
                operation="create",
                cause=e,
            ) from e
        self.index.put(created)
        logger.info("cluster_node_created", node_name=node.name, record_name=created.name)

    def _update_cluster_node(self, node: Node, cluster: Cluster, existing: ClusterNode) -> None:
        # Full overwrite of the mirrored fields; no two-way merge.
        record = project_node(node, cluster, self.cluster_name)
        record.metadata.resource_version = existing.metadata.resource_version
        record.metadata.name = existing.metadata.name
        record.metadata.uid = existing.metadata.uid
        record.metadata.owner_references = copy.deepcopy(existing.metadata.owner_references)
        record.status.requested = copy.deepcopy(existing.status.requested)
        record.status.limits = copy.deepcopy(existing.status.limits)

        logger.info("cluster_node_updating", node_name=node.name, record_name=existing.name)
        try:
            updated = self.records.update(record)
        except Exception as e:
            self.index.invalidate()
            raise ReconcileError(
                f"Failed to update cluster node [{node.name}]",
                node_name=node.name,
                operation="update",
                cause=e,
            ) from e
        self.index.put(updated)
        logger.info("cluster_node_updated", node_name=node.name, record_name=updated.name)


__all__ = ["NodeSyncer"]
