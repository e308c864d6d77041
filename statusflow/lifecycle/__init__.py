"""
Task status lifecycle: registry, transition graph, validation, and safe deletion.

Main exports:
- StatusRegistry: Status CRUD, ordering, and the single-default rule
- TransitionGraph: Directed edges between status names
- LifecycleValidator: Allow/deny decisions for task status moves
- TaskStatusService: The one place task statuses are changed
- StatusDeletionPlanner: Preview and execute status deletion
- Lifecycle: All of the above wired to one store
"""

from statusflow.lifecycle.registry import StatusRegistry
from statusflow.lifecycle.graph import TransitionGraph
from statusflow.lifecycle.validator import LifecycleValidator
from statusflow.lifecycle.tasks import TaskStatusService
from statusflow.lifecycle.deletion import StatusDeletionPlanner
from statusflow.lifecycle.locks import KeyedLocks
from statusflow.lifecycle.service import Lifecycle

__all__ = [
    "StatusRegistry",
    "TransitionGraph",
    "LifecycleValidator",
    "TaskStatusService",
    "StatusDeletionPlanner",
    "KeyedLocks",
    "Lifecycle",
]
