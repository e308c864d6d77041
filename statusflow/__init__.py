"""statusflow: task status lifecycle management (statuses, transitions, safe deletion)."""

from statusflow.core.models import Status, Transition, Task, DeletionPolicy
from statusflow.lifecycle import (
    StatusRegistry,
    TransitionGraph,
    LifecycleValidator,
    StatusDeletionPlanner,
    TaskStatusService,
    Lifecycle,
)
from statusflow.store import JsonlStore, MemoryStore

__all__ = [
    "Status",
    "Transition",
    "Task",
    "DeletionPolicy",
    "StatusRegistry",
    "TransitionGraph",
    "LifecycleValidator",
    "StatusDeletionPlanner",
    "TaskStatusService",
    "Lifecycle",
    "JsonlStore",
    "MemoryStore",
]
