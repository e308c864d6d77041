"""
Store layer for lifecycle persistence.

Canonical exports:
- JsonlStore: JSONL file persistence with file locking and atomic writes
- MemoryStore: In-process store with identical transaction semantics
- LifecycleStore: Protocol the lifecycle modules depend on
"""

from statusflow.store.protocol import (
    LifecycleStore,
    StatusStore,
    TransitionStore,
    TaskStore,
    ActivityStore,
)
from statusflow.store.base import TableStore
from statusflow.store.memory import MemoryStore
from statusflow.store.repository import JsonlStore

__all__ = [
    "LifecycleStore",
    "StatusStore",
    "TransitionStore",
    "TaskStore",
    "ActivityStore",
    "TableStore",
    "MemoryStore",
    "JsonlStore",
]
