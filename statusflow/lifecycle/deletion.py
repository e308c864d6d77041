"""
Status deletion planner: safe removal of a status still referenced by tasks and transitions.

A deletion is previewed, a policy is chosen, then executed. Execution runs
three steps in a fixed order inside one store transaction:

1. Reassign or delete every task holding the status.
2. Prune every transition that starts or ends at the status.
3. Delete the status row.

If any step raises, the transaction discards all staged writes, so the status
row is never removed while tasks still reference it. Executions against the
same status id are serialised by a per-id lock; different ids run
independently up to the store's own transaction lock.
"""

import logging
from typing import Optional, Union

from statusflow.core.exceptions import ValidationError
from statusflow.core.models import (
    DeletionOutcome,
    DeletionPolicy,
    DeletionPreview,
)
from statusflow.lifecycle.graph import TransitionGraph
from statusflow.lifecycle.locks import KeyedLocks
from statusflow.lifecycle.registry import StatusRegistry
from statusflow.lifecycle.tasks import record_status_change
from statusflow.store.protocol import LifecycleStore


logger = logging.getLogger(__name__)


class StatusDeletionPlanner:
    """
    Previews and executes status deletions.

    Attributes:
        store: Lifecycle store (tasks, statuses, transitions, activity).
        registry: StatusRegistry used to resolve ids.
        graph: TransitionGraph used for edge lookups and pruning.
        locks: Per-status-id lock table; share one instance between planners
            that operate on the same store.
    """

    def __init__(
        self,
        store: LifecycleStore,
        registry: Optional[StatusRegistry] = None,
        graph: Optional[TransitionGraph] = None,
        locks: Optional[KeyedLocks] = None,
    ):
        self.store = store
        self.registry = registry or StatusRegistry(store)
        self.graph = graph or TransitionGraph(store)
        self.locks = locks or KeyedLocks()

    def preview(self, status_id: str) -> DeletionPreview:
        """
        Summarise what deleting a status would touch. Read-only.

        Raises:
            NotFoundError: If the status does not exist.
        """
        with self.store.transaction():
            status = self.registry.get(status_id)
            preview = DeletionPreview(
                status_id=status.id,
                status_name=status.name,
                task_count=self.store.count_tasks_by_status(status.name),
                available_statuses=[
                    s for s in self.registry.list_statuses() if s.id != status.id
                ],
                has_transitions=self.graph.mentions(status.name),
                can_delete=status.can_delete,
            )
        logger.debug(
            f"Deletion preview for {preview.status_name}: "
            f"{preview.task_count} tasks, transitions={preview.has_transitions}"
        )
        return preview

    def execute(
        self,
        status_id: str,
        policy: Union[DeletionPolicy, str, None],
        target_status_id: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> DeletionOutcome:
        """
        Delete a status, handling its tasks according to the chosen policy.

        Args:
            status_id: Status to delete.
            policy: reassign_tasks or delete_tasks.
            target_status_id: Replacement status (reassign_tasks only).
            actor_id: Acting user, recorded on reassignment activity rows.

        Returns:
            DeletionOutcome with the reassigned or deleted task count.

        Raises:
            ValidationError: If the policy is missing/unknown, the target is
                missing, equal to status_id or unknown, a target is given for
                delete_tasks, or the status is protected.
            NotFoundError: If the status does not exist.
            StorageError: Propagated unchanged from the store.
        """
        policy = DeletionPolicy.parse(policy)
        if policy is DeletionPolicy.REASSIGN_TASKS:
            if not target_status_id:
                raise ValidationError(
                    "reassign_tasks requires a target status to move tasks to"
                )
            if target_status_id == status_id:
                raise ValidationError(
                    "Cannot reassign tasks to the status being deleted"
                )
        elif target_status_id:
            raise ValidationError("delete_tasks does not take a target status")

        with self.locks.hold(status_id):
            with self.store.transaction():
                status = self.registry.get(status_id)
                if not status.can_delete:
                    raise ValidationError(f"Status is protected from deletion: {status.name}")

                target = None
                if policy is DeletionPolicy.REASSIGN_TASKS:
                    target = self.store.get_status(target_status_id)
                    if target is None:
                        raise ValidationError(
                            f"Target status does not exist: {target_status_id}"
                        )

                outcome = DeletionOutcome(
                    status_name=status.name,
                    policy=policy,
                    target_status=target.name if target else None,
                )
                task_ids = self.store.list_tasks_by_status(status.name)
                outcome.task_ids = list(task_ids)

                # Step 1: tasks
                if target is not None:
                    for task_id in task_ids:
                        self.store.update_task_status(task_id, target.name)
                        record_status_change(
                            self.store, task_id, status.name, target.name, actor_id
                        )
                    outcome.reassigned_tasks = len(task_ids)
                else:
                    for task_id in task_ids:
                        self.store.delete_task(task_id)
                    outcome.deleted_tasks = len(task_ids)

                # Step 2: transitions
                outcome.removed_transitions = self.graph.remove_edges_touching(status.name)

                # Step 3: status row
                self.store.delete_status(status.id)

        logger.info(
            f"Status deleted: {outcome.status_name} ({policy.value}, "
            f"reassigned={outcome.reassigned_tasks}, deleted={outcome.deleted_tasks}, "
            f"transitions={outcome.removed_transitions}) by {actor_id or 'system'}"
        )
        return outcome
