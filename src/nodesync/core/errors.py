"""
Structured error types for the node reconciler.

Every failure path of a reconciliation returns (raises) one of these errors
to the caller. Nothing is retried locally: the event-delivery layer owns
retry and uses ``retryable`` to decide how loudly to complain about it.

Manifesto:
    - **Typed Error Hierarchy:** Store failures, precondition violations and
      reconcile wrappers are distinct types
    - **Explicit Retry Semantics:** Each error knows if redelivery can help
    - **Rich Context:** Errors carry node and cluster names for logging
    - **Error Chaining:** The original store exception is preserved as cause

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       NodeSyncError                              │
        │  (category, retryable, retry_after, context, cause)             │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  TransientError      PreconditionError     ReconcileError       │
        │  (retryable=True)    (PRECONDITION)        (RECONCILE)          │
        │       │                    │                                     │
        │  StoreError          ClusterRemovingError                       │
        │  ClusterLookupError                                             │
        │       │                                                          │
        │  ConflictError   AlreadyExistsError   NotFoundError             │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ConflictError("stale resource version")
    >>> error.retryable
    True

    >>> error = ClusterRemovingError("local")
    >>> error.retryable
    False
    >>> error.context.cluster_name
    'local'

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context, nodesync
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories for classification and routing.

    Attributes:
        STORE: Record or cluster store access failures
        PRECONDITION: The cluster is not in a state that accepts the change
        RECONCILE: Wrapped failure of a create/update/delete decision
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
    """

    STORE = "STORE"
    PRECONDITION = "PRECONDITION"
    RECONCILE = "RECONCILE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error.

    Any additional metadata can be stored in ``metadata``. ``to_dict()``
    serializes all non-None fields for logging.

    Attributes:
        node_name: Node identity being reconciled
        cluster_name: Owning cluster
        record_name: Generated name of the derived record, when known
        operation: Store operation (list, get, create, update, delete)
        metadata: Additional key-value pairs
    """

    node_name: str | None = None
    cluster_name: str | None = None
    record_name: str | None = None
    operation: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["node_name", "cluster_name", "record_name", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NodeSyncError(Exception):
    """
    Base exception for all reconciler errors.

    All instances carry:
    - **category:** ErrorCategory for classification
    - **retryable:** Whether redelivering the event can succeed
    - **retry_after:** Optional seconds to wait before redelivery
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception for chaining

    Subclasses set ``default_category`` and ``default_retryable``.

    Examples:
        >>> error = NodeSyncError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(node_name="worker-1").context.node_name
        'worker-1'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NodeSyncError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StoreError("Failed").with_context(
                node_name="worker-1",
                operation="update",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS (Retryable)
# =============================================================================


class TransientError(NodeSyncError):
    """Temporary error that may succeed when the event is redelivered."""

    default_category = ErrorCategory.STORE
    default_retryable = True


class StoreError(TransientError):
    """A record or cluster store call failed."""

    default_category = ErrorCategory.STORE


class ConflictError(StoreError):
    """Update carried a stale resource version."""

    pass


class AlreadyExistsError(StoreError):
    """Create collided with an existing record (name or node_name)."""

    pass


class NotFoundError(StoreError):
    """The requested record or cluster does not exist.

    Not retryable on its own; callers that treat absence as a normal outcome
    check for it explicitly.
    """

    default_retryable = False


class ClusterLookupError(TransientError):
    """The owning cluster could not be fetched, so convergence cannot proceed."""

    def __init__(self, cluster_name: str, cause: Exception | None = None):
        super().__init__(
            f"Failed to get cluster [{cluster_name}]",
            context=ErrorContext(cluster_name=cluster_name, operation="get"),
            cause=cause,
        )
        self.cluster_name = cluster_name


# =============================================================================
# PRECONDITION ERRORS (Not retryable)
# =============================================================================


class PreconditionError(NodeSyncError):
    """The cluster is in a state that rejects the change.

    Redelivery keeps failing until the precondition clears.
    """

    default_category = ErrorCategory.PRECONDITION
    default_retryable = False


class ClusterRemovingError(PreconditionError):
    """A node may not be attached to a cluster that is being removed."""

    def __init__(self, cluster_name: str, node_name: str | None = None):
        super().__init__(
            f"Cluster [{cluster_name}] in removing state",
            context=ErrorContext(cluster_name=cluster_name, node_name=node_name),
        )
        self.cluster_name = cluster_name


# =============================================================================
# RECONCILE ERRORS
# =============================================================================


class ReconcileError(NodeSyncError):
    """A create, update or delete of a derived record failed.

    Wraps the cause with the node name. Any ``StoreError`` cause is
    retryable, including ``NotFoundError``, since
    redelivery re-lists the store. Other causes keep their own retryability.
    """

    default_category = ErrorCategory.RECONCILE

    def __init__(self, message: str, *, node_name: str, operation: str, cause: Exception):
        super().__init__(
            f"{message} {cause}",
            retryable=isinstance(cause, StoreError) or is_retryable(cause),
            retry_after=get_retry_after(cause),
            context=ErrorContext(node_name=node_name, operation=operation),
            cause=cause,
        )


class ConfigError(NodeSyncError):
    """Invalid reconciler configuration. Never retryable."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, NodeSyncError):
        return error.retryable
    retryable_types = (
        ConnectionError,
        TimeoutError,
        OSError,
    )
    return isinstance(error, retryable_types)


def get_retry_after(error: Exception) -> int | None:
    """Get retry delay from error, if specified."""
    if isinstance(error, NodeSyncError):
        return error.retry_after
    return None


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "NodeSyncError",
    "TransientError",
    "StoreError",
    "ConflictError",
    "AlreadyExistsError",
    "NotFoundError",
    "ClusterLookupError",
    "PreconditionError",
    "ClusterRemovingError",
    "ReconcileError",
    "ConfigError",
    "is_retryable",
    "get_retry_after",
]
