"""Object metadata shared by nodes, clusters and derived records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class OwnerReference:
    """Back-reference from a derived record to the record that owns it."""

    name: str
    uid: str
    api_version: str
    kind: str


@dataclass
class ObjectMeta:
    """Identity and lifecycle metadata.

    ``name`` is store-assigned for derived records: callers leave it empty and
    set ``generate_name`` as a prefix hint. ``resource_version`` is the
    store's optimistic-concurrency token and must be carried into updates.
    """

    name: str = ""
    generate_name: str = ""
    uid: str = ""
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[OwnerReference] = field(default_factory=list)
    deletion_timestamp: datetime | None = None
