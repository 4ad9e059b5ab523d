"""Projection of a node observation into a new ``ClusterNode``.

Pure: no store access and no side effects. The result is not persisted and
carries no concrete name, only the ``clusternode-`` generate-name hint.
"""

from __future__ import annotations

import copy

from nodesync.models import (
    CLUSTER_NODE_API_VERSION,
    CLUSTER_NODE_GENERATE_NAME,
    CLUSTER_NODE_KIND,
    Cluster,
    ClusterNode,
    ClusterNodeStatus,
    Node,
    ObjectMeta,
    OwnerReference,
)


def owner_reference_for(cluster: Cluster, cluster_name: str) -> OwnerReference:
    """Back-reference to ``cluster`` for lifecycle association."""
    return OwnerReference(
        name=cluster_name,
        uid=cluster.uid,
        api_version=cluster.api_version,
        kind=cluster.kind,
    )


def project_node(
    node: Node | None, cluster: Cluster, cluster_name: str
) -> ClusterNode | None:
    """Build the derived record for ``node`` owned by ``cluster``.

    Spec and status are deep-copied so later changes to the observation
    never leak into the record. Labels and annotations are copied whole.
    ``status.requested``/``status.limits`` are left empty; the caller owns
    them.

    Returns:
        The unsaved record, or None when ``node`` is None.
    """
    if node is None:
        return None

    return ClusterNode(
        metadata=ObjectMeta(
            generate_name=CLUSTER_NODE_GENERATE_NAME,
            labels=dict(node.metadata.labels),
            annotations=dict(node.metadata.annotations),
            owner_references=[owner_reference_for(cluster, cluster_name)],
        ),
        api_version=CLUSTER_NODE_API_VERSION,
        kind=CLUSTER_NODE_KIND,
        cluster_name=cluster_name,
        node_name=node.name,
        spec=copy.deepcopy(node.spec),
        status=ClusterNodeStatus(node_status=copy.deepcopy(node.status)),
    )


__all__ = ["owner_reference_for", "project_node"]
