"""Tests for nodesync.reconciler.index -- node_name lookup."""

import pytest

from nodesync.core.errors import StoreError
from nodesync.models import ClusterNode, ObjectMeta
from nodesync.reconciler import NodeIndex
from nodesync.stores import InMemoryRecordStore


def _record(node_name: str) -> ClusterNode:
    return ClusterNode(
        metadata=ObjectMeta(generate_name="clusternode-"),
        cluster_name="local",
        node_name=node_name,
    )


class CountingStore(InMemoryRecordStore):
    def __init__(self):
        super().__init__()
        self.list_calls = 0

    def list(self):
        self.list_calls += 1
        return super().list()


class TestNodeIndex:
    def test_missing_node_is_none(self):
        assert NodeIndex(InMemoryRecordStore()).get("worker-1") is None

    def test_finds_record_by_node_name(self):
        store = InMemoryRecordStore()
        created = store.create(_record("worker-1"))
        store.create(_record("worker-2"))

        found = NodeIndex(store).get("worker-1")

        assert found is not None
        assert found.metadata.name == created.metadata.name

    def test_lists_once(self):
        store = CountingStore()
        store.create(_record("worker-1"))
        index = NodeIndex(store)

        index.get("worker-1")
        index.get("worker-1")
        index.get("worker-2")

        assert store.list_calls == 1

    def test_returns_current_content(self):
        store = InMemoryRecordStore()
        created = store.create(_record("worker-1"))
        index = NodeIndex(store)
        index.get("worker-1")

        created.status.requested = {"cpu": "2"}
        store.update(created)

        assert index.get("worker-1").status.requested == {"cpu": "2"}

    def test_put_and_discard(self):
        store = CountingStore()
        index = NodeIndex(store)
        assert index.get("worker-1") is None

        created = store.create(_record("worker-1"))
        index.put(created)
        assert index.get("worker-1").metadata.name == created.metadata.name

        index.discard("worker-1")
        assert index.get("worker-1") is None
        assert store.list_calls == 1

    def test_invalidate_rebuilds(self):
        store = CountingStore()
        index = NodeIndex(store)
        index.get("worker-1")
        store.create(_record("worker-1"))

        assert index.get("worker-1") is None
        index.invalidate()
        assert index.get("worker-1") is not None
        assert store.list_calls == 2

    def test_entry_deleted_behind_index_is_dropped(self):
        store = InMemoryRecordStore()
        created = store.create(_record("worker-1"))
        index = NodeIndex(store)
        index.get("worker-1")

        store.delete(created.metadata.name)

        assert index.get("worker-1") is None

    def test_list_failure_wrapped_as_store_error(self):
        store = InMemoryRecordStore()
        store.fail_next("list", RuntimeError("boom"))

        with pytest.raises(StoreError) as exc_info:
            NodeIndex(store).get("worker-1")

        assert exc_info.value.retryable is True
        assert exc_info.value.context.operation == "list"

    def test_list_failure_not_cached(self):
        store = InMemoryRecordStore()
        store.create(_record("worker-1"))
        store.fail_next("list", StoreError("unavailable"))
        index = NodeIndex(store)

        with pytest.raises(StoreError):
            index.get("worker-1")
        assert index.get("worker-1") is not None
