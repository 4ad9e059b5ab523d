"""
In-memory record and cluster stores.

Manifesto:
    Tests and single-process deployments need stores that behave like the
    real record store where it matters to the reconciler: generated names,
    optimistic concurrency on update, uniqueness on create, and copies
    instead of shared objects.

Features:
    - **Generated names:** ``generate_name`` + random 5-char suffix
    - **Resource versions:** Monotonic counter, bumped on every write
    - **Conflict detection:** Stale ``resource_version`` on update fails
    - **Uniqueness:** Duplicate name (and by default node_name) on create fails
    - **Failure injection:** ``fail_next(operation, error)`` for tests

Tags:
    nodesync, stores, in-memory, testing, optimistic-concurrency

Doc-Types:
    api-reference
"""

from __future__ import annotations

import copy
import secrets
import string
import threading
import uuid
from datetime import UTC, datetime

from nodesync.core.errors import AlreadyExistsError, ConflictError, NotFoundError
from nodesync.core.logging import get_logger
from nodesync.models import Cluster, ClusterNode

logger = get_logger(__name__)

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def _name_suffix(length: int = 5) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


class InMemoryRecordStore:
    """Thread-safe ``ClusterNode`` store with optimistic concurrency.

    Example::

        store = InMemoryRecordStore()
        created = store.create(ClusterNode(metadata=ObjectMeta(generate_name="clusternode-")))
        created.metadata.name           # 'clusternode-x7k2q'
        created.metadata.resource_version  # '1'
    """

    def __init__(self, *, unique_node_name: bool = True) -> None:
        self._records: dict[str, ClusterNode] = {}
        self._version = 0
        self._lock = threading.Lock()
        self._unique_node_name = unique_node_name
        self._failures: dict[str, list[Exception]] = {}

    # -- Failure injection -------------------------------------------------

    def fail_next(self, operation: str, error: Exception) -> None:
        """Make the next call to ``operation`` raise ``error`` once."""
        with self._lock:
            self._failures.setdefault(operation, []).append(error)

    def _maybe_fail(self, operation: str) -> None:
        pending = self._failures.get(operation)
        if pending:
            raise pending.pop(0)

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    # -- RecordStore -------------------------------------------------------

    def list(self) -> list[ClusterNode]:
        with self._lock:
            self._maybe_fail("list")
            return [copy.deepcopy(r) for r in self._records.values()]

    def get(self, name: str) -> ClusterNode:
        with self._lock:
            self._maybe_fail("get")
            record = self._records.get(name)
            if record is None:
                raise NotFoundError(f"clusternode [{name}] not found").with_context(
                    record_name=name, operation="get"
                )
            return copy.deepcopy(record)

    def create(self, record: ClusterNode) -> ClusterNode:
        with self._lock:
            self._maybe_fail("create")
            stored = copy.deepcopy(record)
            meta = stored.metadata
            if not meta.name:
                if not meta.generate_name:
                    raise ValueError("name or generate_name is required")
                meta.name = meta.generate_name + _name_suffix()
                while meta.name in self._records:
                    meta.name = meta.generate_name + _name_suffix()
            if meta.name in self._records:
                raise AlreadyExistsError(f"clusternode [{meta.name}] already exists").with_context(
                    record_name=meta.name, operation="create"
                )
            if self._unique_node_name and any(
                r.node_name == stored.node_name for r in self._records.values()
            ):
                raise AlreadyExistsError(
                    f"clusternode for node [{stored.node_name}] already exists"
                ).with_context(node_name=stored.node_name, operation="create")

            meta.uid = str(uuid.uuid4())
            meta.resource_version = self._next_version()
            self._records[meta.name] = stored
            logger.debug("record_created", record_name=meta.name, node_name=stored.node_name)
            return copy.deepcopy(stored)

    def update(self, record: ClusterNode) -> ClusterNode:
        with self._lock:
            self._maybe_fail("update")
            name = record.metadata.name
            current = self._records.get(name)
            if current is None:
                raise NotFoundError(f"clusternode [{name}] not found").with_context(
                    record_name=name, operation="update"
                )
            if record.metadata.resource_version != current.metadata.resource_version:
                raise ConflictError(
                    f"clusternode [{name}] has been modified: resource version "
                    f"{record.metadata.resource_version!r} is stale"
                ).with_context(record_name=name, operation="update")

            stored = copy.deepcopy(record)
            stored.metadata.uid = current.metadata.uid
            stored.metadata.resource_version = self._next_version()
            self._records[name] = stored
            logger.debug("record_updated", record_name=name, node_name=stored.node_name)
            return copy.deepcopy(stored)

    def delete(self, name: str) -> None:
        with self._lock:
            self._maybe_fail("delete")
            if self._records.pop(name, None) is None:
                raise NotFoundError(f"clusternode [{name}] not found").with_context(
                    record_name=name, operation="delete"
                )
            logger.debug("record_deleted", record_name=name)


class InMemoryClusterStore:
    """Cluster identity records keyed by name."""

    def __init__(self, clusters: list[Cluster] | None = None) -> None:
        self._clusters: dict[str, Cluster] = {}
        self._lock = threading.Lock()
        self._failures: list[Exception] = []
        for cluster in clusters or []:
            self.put(cluster)

    def fail_next(self, error: Exception) -> None:
        """Make the next ``get`` raise ``error`` once."""
        with self._lock:
            self._failures.append(error)

    def get(self, name: str) -> Cluster:
        with self._lock:
            if self._failures:
                raise self._failures.pop(0)
            cluster = self._clusters.get(name)
            if cluster is None:
                raise NotFoundError(f"cluster [{name}] not found").with_context(
                    cluster_name=name, operation="get"
                )
            return copy.deepcopy(cluster)

    def put(self, cluster: Cluster) -> Cluster:
        with self._lock:
            stored = copy.deepcopy(cluster)
            if not stored.metadata.uid:
                stored.metadata.uid = str(uuid.uuid4())
            self._clusters[stored.name] = stored
            return copy.deepcopy(stored)

    def mark_removing(self, name: str) -> None:
        """Set the deletion marker on cluster ``name``."""
        with self._lock:
            cluster = self._clusters.get(name)
            if cluster is None:
                raise NotFoundError(f"cluster [{name}] not found").with_context(
                    cluster_name=name, operation="mark_removing"
                )
            cluster.metadata.deletion_timestamp = datetime.now(UTC)


__all__ = ["InMemoryClusterStore", "InMemoryRecordStore"]
