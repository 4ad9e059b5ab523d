"""
In-memory node event source.

Manifesto:
    Tests and single-process deployments need something that delivers node
    events the way an orchestrator's informer does: keyed, deduplicated,
    at least once, and redelivered after a handler failure.

Behaves like an informer cache in front of a work queue. ``upsert``/``remove``
change the cache and enqueue the node name. ``drain`` pops keys in FIFO order
and hands every handler the *current* cache state for that key, so a key
queued several times is reconciled once against its latest snapshot.

Tags:
    nodesync, events, in-memory, work-queue, testing, single-node

Doc-Types:
    api-reference
"""

from __future__ import annotations

import copy
import threading
from collections import deque
from dataclasses import dataclass, field

from nodesync.core.errors import is_retryable
from nodesync.core.logging import get_logger
from nodesync.core.protocols import NodeHandler
from nodesync.models import Node, change_for

__all__ = ["DrainResult", "InMemoryNodeEventSource"]

logger = get_logger(__name__)


@dataclass
class DrainResult:
    """Outcome of one ``drain`` call."""

    processed: list[str] = field(default_factory=list)
    failed: dict[str, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class InMemoryNodeEventSource:
    """Keyed, at-least-once node event delivery.

    Example::

        source = InMemoryNodeEventSource()
        source.add_handler(syncer.sync)
        source.upsert(node)
        source.remove("worker-2")
        result = source.drain()
        assert result.ok
    """

    def __init__(self) -> None:
        self._cache: dict[str, Node] = {}
        self._queue: deque[str] = deque()
        self._queued: set[str] = set()
        self._handlers: list[NodeHandler] = []
        self._lock = threading.Lock()

    def add_handler(self, handler: NodeHandler) -> None:
        with self._lock:
            self._handlers.append(handler)

    def upsert(self, node: Node) -> None:
        """Record ``node`` as observed and enqueue its name."""
        with self._lock:
            self._cache[node.name] = copy.deepcopy(node)
            self._enqueue(node.name)

    def remove(self, name: str) -> None:
        """Record node ``name`` as gone and enqueue it."""
        with self._lock:
            self._cache.pop(name, None)
            self._enqueue(name)

    def resync(self) -> None:
        """Enqueue every cached node, as a periodic informer resync does."""
        with self._lock:
            for name in self._cache:
                self._enqueue(name)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _enqueue(self, name: str) -> None:
        if name not in self._queued:
            self._queued.add(name)
            self._queue.append(name)

    def _pop(self) -> tuple[str, Node | None] | None:
        with self._lock:
            if not self._queue:
                return None
            name = self._queue.popleft()
            self._queued.discard(name)
            node = self._cache.get(name)
            return name, copy.deepcopy(node) if node is not None else None

    def drain(self, max_attempts: int = 5) -> DrainResult:
        """Deliver queued keys until the queue is empty.

        A key whose handler raises is requeued at the back and retried, up to
        ``max_attempts`` deliveries in this drain. Keys that still fail are
        reported in ``DrainResult.failed`` and dropped from the queue. A key
        queued again after it succeeded or was dropped starts a fresh count.
        """
        result = DrainResult()
        attempts: dict[str, int] = {}

        while (item := self._pop()) is not None:
            name, node = item
            attempts[name] = attempts.get(name, 0) + 1
            try:
                for handler in list(self._handlers):
                    handler(name, change_for(node))
            except Exception as e:
                if attempts[name] < max_attempts:
                    logger.debug(
                        "node_event_requeued",
                        node_name=name,
                        attempt=attempts[name],
                        error_type=type(e).__name__,
                    )
                    with self._lock:
                        self._enqueue(name)
                else:
                    log = logger.warning if is_retryable(e) else logger.error
                    log(
                        "node_event_dropped",
                        node_name=name,
                        attempts=attempts.pop(name),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    result.failed[name] = e
                continue

            attempts.pop(name, None)
            result.failed.pop(name, None)
            result.processed.append(name)

        return result
