"""
Collaborator contracts for the node reconciler.

The reconciler is a leaf over two stores and is registered with one event
source. All three are passed in as explicit handles, so production adapters
and in-memory fakes are interchangeable.

Architecture:
    ::

        protocols.py
        ├── RecordStore      -- list/get/create/update/delete ClusterNode records
        ├── ClusterStore     -- get Cluster by name
        ├── NodeHandler      -- callable(key, change) registered with a source
        └── NodeEventSource  -- add_handler(handler)

    Implementations:
        stores/memory.py  -- InMemoryRecordStore, InMemoryClusterStore
        events/memory.py  -- InMemoryNodeEventSource

Guardrails:
    ❌ DON'T: Swallow store failures inside an implementation
    ✅ DO: Raise StoreError subclasses (ConflictError, NotFoundError, ...)

    ❌ DON'T: Return shared mutable records from a store
    ✅ DO: Hand out copies; callers mutate freely

Tags:
    protocol, store, event-source, nodesync, contracts
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from nodesync.models import Cluster, ClusterNode, NodeChange


@runtime_checkable
class RecordStore(Protocol):
    """Persistent store of derived ``ClusterNode`` records.

    ``update`` must reject a record whose ``metadata.resource_version`` is
    not the current one with :class:`~nodesync.core.errors.ConflictError`.
    Missing records raise :class:`~nodesync.core.errors.NotFoundError`.
    """

    def list(self) -> list[ClusterNode]:
        ...

    def get(self, name: str) -> ClusterNode:
        ...

    def create(self, record: ClusterNode) -> ClusterNode:
        ...

    def update(self, record: ClusterNode) -> ClusterNode:
        ...

    def delete(self, name: str) -> None:
        ...


@runtime_checkable
class ClusterStore(Protocol):
    """Read access to cluster identity records."""

    def get(self, name: str) -> Cluster:
        ...


NodeHandler = Callable[[str, NodeChange], None]


@runtime_checkable
class NodeEventSource(Protocol):
    """Delivers ``(node_name, change)`` pairs at least once per key."""

    def add_handler(self, handler: NodeHandler) -> None:
        ...


__all__ = [
    "ClusterStore",
    "NodeEventSource",
    "NodeHandler",
    "RecordStore",
]
