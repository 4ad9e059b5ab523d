"""Node observations and the change input delivered to the reconciler.

A delivered event is either ``Observed(node)`` (the orchestrator knows the
node) or ``Removed()`` (the node is gone). ``change_for`` adapts the nullable
snapshot an informer cache hands out into that tagged form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from nodesync.models.meta import ObjectMeta


@dataclass
class Node:
    """The orchestrator's live view of a compute node. Read-only input."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: dict[str, Any] = field(default_factory=dict)
    status: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.metadata.name


@dataclass(frozen=True)
class Observed:
    """The node exists; reconcile towards this snapshot."""

    node: Node


@dataclass(frozen=True)
class Removed:
    """The node no longer exists."""


NodeChange = Union[Observed, Removed]


def change_for(node: Node | None) -> NodeChange:
    """Wrap a possibly-missing node snapshot as a ``NodeChange``."""
    if node is None:
        return Removed()
    return Observed(node)
