"""
Shared pytest fixtures for nodesync tests.

This module provides:
- In-memory record and cluster stores with one live cluster ("local")
- A NodeSyncer wired to those stores
- A ``make_node`` factory for node observations
- Recorded (not applied) logging setup from ``register``
- Auto-marking of tests by location (unit / integration)
"""

import importlib
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Ensure nodesync package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from nodesync.models import Cluster, Node, ObjectMeta
from nodesync.reconciler import NodeSyncer
from nodesync.stores import InMemoryClusterStore, InMemoryRecordStore

CLUSTER_NAME = "local"
CLUSTER_UID = "c0ffee00-0000-4000-8000-000000000001"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def cluster() -> Cluster:
    return Cluster(metadata=ObjectMeta(name=CLUSTER_NAME, uid=CLUSTER_UID))


@pytest.fixture
def cluster_store(cluster: Cluster) -> InMemoryClusterStore:
    return InMemoryClusterStore([cluster])


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def syncer(record_store: InMemoryRecordStore, cluster_store: InMemoryClusterStore) -> NodeSyncer:
    return NodeSyncer(record_store, cluster_store, cluster_name=CLUSTER_NAME)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def configure_logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Record ``register``'s logging setup instead of reconfiguring structlog."""
    calls: list[dict[str, Any]] = []
    module = importlib.import_module("nodesync.reconciler.register")
    monkeypatch.setattr(module, "configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


# =============================================================================
# Node observations
# =============================================================================


@pytest.fixture
def make_node() -> Callable[..., Node]:
    """Factory for node observations with sensible spec/status defaults."""

    def _make(
        name: str = "worker-1",
        *,
        labels: dict[str, str] | None = None,
        annotations: dict[str, str] | None = None,
        spec: dict[str, Any] | None = None,
        status: dict[str, Any] | None = None,
    ) -> Node:
        return Node(
            metadata=ObjectMeta(
                name=name,
                labels=labels if labels is not None else {"kubernetes.io/hostname": name},
                annotations=annotations if annotations is not None else {},
            ),
            spec=spec if spec is not None else {"podCIDR": "10.42.0.0/24", "unschedulable": False},
            status=status
            if status is not None
            else {
                "capacity": {"cpu": "4", "memory": "16Gi", "pods": "110"},
                "allocatable": {"cpu": "3800m", "memory": "15Gi", "pods": "110"},
                "conditions": [{"type": "Ready", "status": "True"}],
                "addresses": [{"type": "InternalIP", "address": "10.0.0.11"}],
            },
        )

    return _make
