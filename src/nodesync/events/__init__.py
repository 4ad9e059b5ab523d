"""Node event sources.

Modules
-------
memory      InMemoryNodeEventSource -- informer cache + keyed work queue
"""

from nodesync.events.memory import DrainResult, InMemoryNodeEventSource

__all__ = ["DrainResult", "InMemoryNodeEventSource"]
