"""Store protocol and contracts for lifecycle persistence.

Defines the interfaces the lifecycle modules require from collaborators.
Any backing store (JSONL files, memory, a SQL adapter) satisfies these as long
as reads inside one transaction observe that transaction's own writes.
"""

from typing import ContextManager, List, Optional, Protocol

from statusflow.core.models import Status, Transition, Task, TaskActivity


# ============================================================================
# Record Stores
# ============================================================================


class StatusStore(Protocol):
    """Row primitives for Status records, keyed by id."""

    def list_statuses(self) -> List[Status]: ...

    def get_status(self, status_id: str) -> Optional[Status]: ...

    def find_status_by_name(self, name: str) -> Optional[Status]: ...

    def add_status(self, status: Status) -> None: ...

    def update_status(self, status: Status) -> None: ...

    def delete_status(self, status_id: str) -> None: ...


class TransitionStore(Protocol):
    """Row primitives for Transition records, filterable by endpoint."""

    def list_transitions(
        self,
        from_status: Optional[str] = None,
        to_status: Optional[str] = None,
    ) -> List[Transition]: ...

    def get_transition(self, transition_id: str) -> Optional[Transition]: ...

    def add_transition(self, transition: Transition) -> None: ...

    def update_transition(self, transition: Transition) -> None: ...

    def delete_transition(self, transition_id: str) -> None: ...


class TaskStore(Protocol):
    """The task operations the lifecycle needs from the surrounding CRUD system."""

    def count_tasks_by_status(self, status_name: str) -> int: ...

    def list_tasks_by_status(self, status_name: str) -> List[str]: ...

    def update_task_status(self, task_id: str, new_status: str) -> None: ...

    def delete_task(self, task_id: str) -> None: ...

    def add_task(self, task: Task) -> None: ...

    def get_task(self, task_id: str) -> Optional[Task]: ...

    def list_tasks(self) -> List[Task]: ...


class ActivityStore(Protocol):
    """Append-only task activity log."""

    def add_activity(self, activity: TaskActivity) -> None: ...

    def list_activity(self, task_id: Optional[str] = None) -> List[TaskActivity]: ...


# ============================================================================
# Unit of Work
# ============================================================================


class LifecycleStore(StatusStore, TransitionStore, TaskStore, ActivityStore, Protocol):
    """Combined store with an all-or-nothing unit of work.

    ``transaction()`` must serialise writers, let nested calls join the
    outer transaction, and discard every staged write if the block raises.
    """

    def transaction(self) -> ContextManager["LifecycleStore"]: ...
