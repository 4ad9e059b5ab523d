"""
nodesync: projects orchestrator nodes into cluster-scoped ClusterNode records.

Quick start::

    from nodesync import NodeSyncer, Observed, Removed
    from nodesync.stores import InMemoryClusterStore, InMemoryRecordStore

    syncer = NodeSyncer(records, clusters, cluster_name="local")
    syncer.sync(node.name, Observed(node))   # create or update
    syncer.sync(node.name, Removed())        # delete

Packages
--------
core        errors, logging, settings, collaborator protocols
models      Node, Cluster, ClusterNode and the Observed / Removed input
reconciler  NodeIndex, project_node, NodeSyncer, register
stores      in-memory record and cluster stores
events      in-memory node event source
"""

from nodesync.core.errors import (
    ClusterLookupError,
    ClusterRemovingError,
    NodeSyncError,
    ReconcileError,
    StoreError,
)
from nodesync.models import (
    Cluster,
    ClusterNode,
    ClusterNodeStatus,
    Node,
    NodeChange,
    ObjectMeta,
    Observed,
    OwnerReference,
    Removed,
    change_for,
)
from nodesync.reconciler import NodeIndex, NodeSyncer, project_node, register

__version__ = "0.1.0"

__all__ = [
    "Cluster",
    "ClusterLookupError",
    "ClusterNode",
    "ClusterNodeStatus",
    "ClusterRemovingError",
    "Node",
    "NodeChange",
    "NodeIndex",
    "NodeSyncError",
    "NodeSyncer",
    "ObjectMeta",
    "Observed",
    "OwnerReference",
    "ReconcileError",
    "Removed",
    "StoreError",
    "change_for",
    "project_node",
    "register",
]
