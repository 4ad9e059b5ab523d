"""Node reconciler: lookup, projection and convergence.

Modules
-------
index       NodeIndex -- node_name -> ClusterNode lookup
projection  project_node -- pure node -> ClusterNode builder
syncer      NodeSyncer -- create/update/delete convergence, sync() entry point
register    register -- attach a NodeSyncer to an event source
"""

from nodesync.reconciler.index import NodeIndex
from nodesync.reconciler.projection import owner_reference_for, project_node
from nodesync.reconciler.register import register
from nodesync.reconciler.syncer import NodeSyncer

__all__ = [
    "NodeIndex",
    "NodeSyncer",
    "owner_reference_for",
    "project_node",
    "register",
]
