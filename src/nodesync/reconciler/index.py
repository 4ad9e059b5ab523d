"""Lookup from node name to derived record.

WHY
───
Every event needs the existing ``ClusterNode`` for its node, if any.
Re-listing the store and scanning per event costs O(n) for each of n nodes.
``NodeIndex`` lists once and keys the records' generated names by
``node_name``. A generated name is never reassigned, so the mapping only
goes stale when a record is created or deleted behind the syncer's back.
Record content is always read fresh with ``records.get(name)``, so
accounting writes by other reconcilers never leave a stale
resource version in the index.

ARCHITECTURE
────────────
::

    NodeIndex(records)
      ├── .get(node_name)     ─ current record or None (builds on first use)
      ├── .put(record)        ─ after create/update
      ├── .discard(node_name) ─ after delete
      └── .invalidate()       ─ after a failed write; next get re-lists

A record created by someone else surfaces as an AlreadyExistsError on
create, which invalidates the index, and the redelivered event then
reconciles against a fresh listing. A record deleted by someone else is
noticed on ``get`` and dropped.
"""

from __future__ import annotations

import threading

from nodesync.core.errors import NodeSyncError, NotFoundError, StoreError
from nodesync.core.logging import get_logger
from nodesync.core.protocols import RecordStore
from nodesync.models import ClusterNode

logger = get_logger(__name__)


class NodeIndex:
    """Thread-safe ``node_name -> record name`` mapping over a record store."""

    def __init__(self, records: RecordStore):
        self._records = records
        self._names: dict[str, str] | None = None
        self._lock = threading.Lock()

    def get(self, node_name: str) -> ClusterNode | None:
        """Return the current record for ``node_name``, or None if there is none.

        Raises:
            StoreError: If listing or fetching fails. Not retried here.
        """
        with self._lock:
            if self._names is None:
                self._names = self._build()
            name = self._names.get(node_name)
        if name is None:
            return None

        try:
            return self._records.get(name)
        except NotFoundError:
            logger.debug("node_index_entry_gone", node_name=node_name, record_name=name)
            self.discard(node_name)
            return None
        except NodeSyncError:
            raise
        except Exception as e:
            raise StoreError(f"Failed to get cluster node [{name}]", cause=e).with_context(
                record_name=name, operation="get"
            ) from e

    def put(self, record: ClusterNode) -> None:
        with self._lock:
            if self._names is not None:
                self._names[record.node_name] = record.name

    def discard(self, node_name: str) -> None:
        with self._lock:
            if self._names is not None:
                self._names.pop(node_name, None)

    def invalidate(self) -> None:
        with self._lock:
            self._names = None

    def _build(self) -> dict[str, str]:
        try:
            records = self._records.list()
        except NodeSyncError:
            raise
        except Exception as e:
            raise StoreError("Failed to list cluster nodes", cause=e).with_context(
                operation="list"
            ) from e

        names: dict[str, str] = {}
        for record in records:
            # First match wins, same as a linear scan.
            names.setdefault(record.node_name, record.name)
        logger.debug("node_index_built", records=len(names))
        return names


__all__ = ["NodeIndex"]
