"""Record and cluster store adapters."""

from nodesync.stores.memory import InMemoryClusterStore, InMemoryRecordStore

__all__ = ["InMemoryClusterStore", "InMemoryRecordStore"]
