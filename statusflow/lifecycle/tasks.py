"""
Task status service: every change to a task's status goes through here.

Creation picks the default status, moves are checked by LifecycleValidator,
and each committed move leaves a status_changed activity row.
"""

import logging
from typing import Dict, List, Optional

from statusflow.constants import ACTION_STATUS_CHANGED, COMPLETED_STATUS
from statusflow.core.exceptions import NotFoundError, ValidationError
from statusflow.core.models import Task, TaskActivity
from statusflow.core.naming import new_record_id, normalize_status_name, utc_timestamp
from statusflow.lifecycle.graph import TransitionGraph
from statusflow.lifecycle.registry import StatusRegistry
from statusflow.lifecycle.validator import LifecycleValidator
from statusflow.store.protocol import LifecycleStore


logger = logging.getLogger(__name__)


def record_status_change(
    store: LifecycleStore,
    task_id: str,
    old_status: Optional[str],
    new_status: Optional[str],
    actor_id: Optional[str],
) -> TaskActivity:
    """Append a status_changed activity row (call within a transaction)."""
    activity = TaskActivity(
        id=new_record_id(),
        task_id=task_id,
        action_type=ACTION_STATUS_CHANGED,
        old_value=old_status,
        new_value=new_status,
        acted_by=actor_id,
        created_at=utc_timestamp(),
    )
    store.add_activity(activity)
    return activity


class TaskStatusService:
    """Creates tasks and moves them between statuses under lifecycle rules."""

    def __init__(
        self,
        store: LifecycleStore,
        registry: Optional[StatusRegistry] = None,
        validator: Optional[LifecycleValidator] = None,
        completed_status: str = COMPLETED_STATUS,
    ):
        self.store = store
        self.completed_status = completed_status
        self.registry = registry or StatusRegistry(store)
        self.validator = validator or LifecycleValidator(TransitionGraph(store))

    def get(self, task_id: str) -> Task:
        task = self.store.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def list_tasks(self, status: Optional[str] = None) -> List[Task]:
        tasks = self.store.list_tasks()
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return tasks

    def create_task(
        self,
        title: str,
        status: Optional[str] = None,
        actor_id: Optional[str] = None,
        task_id: Optional[str] = None,
    ) -> Task:
        """
        Create a task in the given status, or in the default status.

        Without an explicit status the default status is used, falling back
        to the first status in workflow order.

        Raises:
            ValidationError: If title is empty or no statuses exist.
            NotFoundError: If an explicit status does not exist.
        """
        if not title or not str(title).strip():
            raise ValidationError("Task title is required")

        with self.store.transaction():
            if status:
                initial = self.registry.get_by_name(status).name
            else:
                default = self.registry.get_default()
                if default is None:
                    ordered = self.registry.list_statuses()
                    if not ordered:
                        raise ValidationError("No statuses defined; create one first")
                    default = ordered[0]
                initial = default.name

            now = utc_timestamp()
            task = Task(
                id=task_id or new_record_id(),
                title=str(title).strip(),
                status=initial,
                created_at=now,
                updated_at=now,
            )
            self.store.add_task(task)
            record_status_change(self.store, task.id, None, initial, actor_id)

        logger.info(f"Task created: {task.id} in {initial} by {actor_id or 'system'}")
        return task

    def change_status(
        self, task_id: str, new_status: str, actor_id: Optional[str] = None
    ) -> Task:
        """
        Move a task to a new status if the lifecycle permits it.

        Moving to the current status is a no-op and records nothing.

        Raises:
            NotFoundError: If the task or the target status does not exist.
            TransitionDeniedError: If no edge permits the move.
        """
        new_status = normalize_status_name(new_status)

        with self.store.transaction():
            task = self.get(task_id)
            old_status = task.status
            if new_status == old_status:
                return task

            self.registry.get_by_name(new_status)
            self.validator.require_transition(old_status, new_status)

            self.store.update_task_status(task_id, new_status)
            record_status_change(self.store, task_id, old_status, new_status, actor_id)
            task = self.get(task_id)

        logger.info(
            f"Task {task_id}: {old_status} -> {new_status} by {actor_id or 'system'}"
        )
        return task

    def complete_task(self, task_id: str, actor_id: Optional[str] = None) -> Task:
        """
        Move a task to the completed status.

        Completion needs an edge like any other move.

        Raises:
            ValidationError: If the task is already completed.
            TransitionDeniedError: If the current status cannot reach completed.
        """
        with self.store.transaction():
            task = self.get(task_id)
            if task.status == self.completed_status:
                raise ValidationError(f"Task is already completed: {task_id}")
            return self.change_status(task_id, self.completed_status, actor_id=actor_id)

    def status_counts(self) -> Dict[str, int]:
        """Task count per status name, in workflow order, including empty statuses."""
        with self.store.transaction():
            counts = {name: 0 for name in self.registry.names()}
            for task in self.store.list_tasks():
                counts[task.status] = counts.get(task.status, 0) + 1
        return counts
