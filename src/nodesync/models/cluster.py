"""Cluster identity record (read-only from the reconciler's side)."""

from __future__ import annotations

from dataclasses import dataclass, field

from nodesync.models.meta import ObjectMeta


@dataclass
class Cluster:
    """The cluster that owns derived node records."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    api_version: str = "management.cattle.io/v3"
    kind: str = "Cluster"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def is_removing(self) -> bool:
        """True once the cluster carries a deletion marker."""
        return self.metadata.deletion_timestamp is not None
