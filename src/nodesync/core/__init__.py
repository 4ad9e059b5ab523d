"""Ambient primitives: errors, logging, settings and collaborator protocols."""

from nodesync.core.errors import (
    AlreadyExistsError,
    ClusterLookupError,
    ClusterRemovingError,
    ConfigError,
    ConflictError,
    ErrorCategory,
    ErrorContext,
    NodeSyncError,
    NotFoundError,
    PreconditionError,
    ReconcileError,
    StoreError,
    TransientError,
    is_retryable,
)
from nodesync.core.protocols import ClusterStore, NodeEventSource, NodeHandler, RecordStore

__all__ = [
    "AlreadyExistsError",
    "ClusterLookupError",
    "ClusterRemovingError",
    "ClusterStore",
    "ConfigError",
    "ConflictError",
    "ErrorCategory",
    "ErrorContext",
    "NodeEventSource",
    "NodeHandler",
    "NodeSyncError",
    "NotFoundError",
    "PreconditionError",
    "ReconcileError",
    "RecordStore",
    "StoreError",
    "TransientError",
    "is_retryable",
]
