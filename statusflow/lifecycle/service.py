"""Wiring: one Lifecycle object per store, sharing its registry, graph and locks."""

from statusflow.constants import COMPLETED_STATUS
from statusflow.lifecycle.deletion import StatusDeletionPlanner
from statusflow.lifecycle.graph import TransitionGraph
from statusflow.lifecycle.locks import KeyedLocks
from statusflow.lifecycle.registry import StatusRegistry
from statusflow.lifecycle.tasks import TaskStatusService
from statusflow.lifecycle.validator import LifecycleValidator
from statusflow.store.protocol import LifecycleStore


class Lifecycle:
    """Facade giving the surrounding application one handle on the lifecycle core."""

    def __init__(self, store: LifecycleStore, completed_status: str = COMPLETED_STATUS):
        self.store = store
        self.registry = StatusRegistry(store)
        self.graph = TransitionGraph(store)
        self.validator = LifecycleValidator(self.graph)
        self.tasks = TaskStatusService(
            store,
            registry=self.registry,
            validator=self.validator,
            completed_status=completed_status,
        )
        self.deletion = StatusDeletionPlanner(
            store,
            registry=self.registry,
            graph=self.graph,
            locks=KeyedLocks(),
        )
