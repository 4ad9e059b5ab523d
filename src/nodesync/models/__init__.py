"""Record models for the node reconciler.

Manifesto:
    The reconciler reads nodes and clusters and writes derived
    ``ClusterNode`` records. Each needs a typed dataclass so the syncer,
    the stores and the tests work with structured objects instead of
    raw dicts.

Modules
-------
meta          ObjectMeta, OwnerReference
node          Node observation and the Observed / Removed change input
cluster       Cluster identity record
cluster_node  ClusterNode derived record and its status

Tags:
    nodesync, models, dataclasses
"""

from nodesync.models.cluster import Cluster
from nodesync.models.cluster_node import (
    CLUSTER_NODE_API_VERSION,
    CLUSTER_NODE_GENERATE_NAME,
    CLUSTER_NODE_KIND,
    ClusterNode,
    ClusterNodeStatus,
)
from nodesync.models.meta import ObjectMeta, OwnerReference
from nodesync.models.node import Node, NodeChange, Observed, Removed, change_for

__all__ = [
    "CLUSTER_NODE_API_VERSION",
    "CLUSTER_NODE_GENERATE_NAME",
    "CLUSTER_NODE_KIND",
    "Cluster",
    "ClusterNode",
    "ClusterNodeStatus",
    "Node",
    "NodeChange",
    "ObjectMeta",
    "Observed",
    "OwnerReference",
    "Removed",
    "change_for",
]
