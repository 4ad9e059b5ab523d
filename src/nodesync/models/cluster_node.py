"""Derived ``ClusterNode`` record.

Field ownership
───────────────
spec, status.node_status, labels, annotations : mirrored from the node on every sync
status.requested, status.limits               : owned by accounting reconcilers
metadata.name, uid, resource_version          : assigned by the record store
metadata.owner_references                     : set once at creation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nodesync.models.meta import ObjectMeta

CLUSTER_NODE_API_VERSION = "cluster.cattle.io/v1"
CLUSTER_NODE_KIND = "ClusterNode"
CLUSTER_NODE_GENERATE_NAME = "clusternode-"


@dataclass
class ClusterNodeStatus:
    """Observed state: the node status mirror plus resource accounting."""

    node_status: dict[str, Any] = field(default_factory=dict)
    requested: dict[str, str] = field(default_factory=dict)
    limits: dict[str, str] = field(default_factory=dict)


@dataclass
class ClusterNode:
    """Cluster-scoped projection of one node."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    api_version: str = CLUSTER_NODE_API_VERSION
    kind: str = CLUSTER_NODE_KIND
    cluster_name: str = ""
    node_name: str = ""
    spec: dict[str, Any] = field(default_factory=dict)
    status: ClusterNodeStatus = field(default_factory=ClusterNodeStatus)

    @property
    def name(self) -> str:
        return self.metadata.name
