"""
Status registry: CRUD over status definitions, sequence ordering, and the single-default rule.

Statuses are never deleted here. Removal has cascading effects on tasks and
transitions and goes through StatusDeletionPlanner.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from statusflow.constants import DEFAULT_STATUS_COLOR
from statusflow.core.exceptions import ConflictError, NotFoundError, ValidationError
from statusflow.core.models import Status
from statusflow.core.naming import new_record_id, normalize_status_name, utc_timestamp
from statusflow.store.protocol import LifecycleStore


logger = logging.getLogger(__name__)


class StatusRegistry:
    """
    Source of truth for which status names exist.

    All mutations run inside one store transaction, so the read-clear-set
    sequence that maintains the single default cannot interleave with another
    writer.

    Attributes:
        store: Lifecycle store holding statuses, transitions and tasks.
    """

    UPDATABLE_FIELDS = {
        "name",
        "description",
        "color",
        "sequence_order",
        "is_default",
        "can_delete",
    }

    def __init__(self, store: LifecycleStore):
        self.store = store

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_statuses(self) -> List[Status]:
        """All statuses in workflow order (sequence_order, then name)."""
        return sorted(
            self.store.list_statuses(), key=lambda s: (s.sequence_order, s.name)
        )

    def names(self) -> List[str]:
        """Status names in workflow order."""
        return [s.name for s in self.list_statuses()]

    def get(self, status_id: str) -> Status:
        """
        Get a status by id.

        Raises:
            NotFoundError: If no status has this id.
        """
        status = self.store.get_status(status_id)
        if status is None:
            raise NotFoundError("Status", status_id)
        return status

    def get_by_name(self, name: str) -> Status:
        """
        Get a status by name.

        Raises:
            NotFoundError: If no status has this name.
        """
        status = self.store.find_status_by_name(normalize_status_name(name))
        if status is None:
            raise NotFoundError("Status", name)
        return status

    def exists(self, name: str) -> bool:
        return self.store.find_status_by_name(normalize_status_name(name)) is not None

    def get_default(self) -> Optional[Status]:
        """The status new tasks receive when none is chosen, if one is marked."""
        for status in self.store.list_statuses():
            if status.is_default:
                return status
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        color: Optional[str] = None,
        description: Optional[str] = None,
        sequence_order: Optional[int] = None,
        is_default: bool = False,
        can_delete: bool = True,
        actor_id: Optional[str] = None,
    ) -> Status:
        """
        Create a new status.

        Args:
            name: Unique, human-facing name.
            color: Display color (default: gray).
            description: Optional free text.
            sequence_order: Explicit position; defaults to max(existing) + 1.
            is_default: Mark as the default status, clearing any other default.
            can_delete: Whether the status may later be deleted.
            actor_id: Acting user, recorded in logs.

        Returns:
            The created Status.

        Raises:
            ValidationError: If name is empty.
            ConflictError: If another status already uses the name.
        """
        name = normalize_status_name(name)
        if not name:
            raise ValidationError("Status name is required")

        with self.store.transaction():
            if self.store.find_status_by_name(name) is not None:
                raise ConflictError("Status", name)

            existing = self.store.list_statuses()
            if sequence_order is None:
                sequence_order = max((s.sequence_order for s in existing), default=0) + 1

            if is_default:
                self._clear_default(existing)

            now = utc_timestamp()
            status = Status(
                id=new_record_id(),
                name=name,
                sequence_order=sequence_order,
                color=color or DEFAULT_STATUS_COLOR,
                description=description,
                is_default=bool(is_default),
                can_delete=bool(can_delete),
                created_at=now,
                updated_at=now,
            )
            self.store.add_status(status)

        logger.info(
            f"Status created: {status.name} (seq={status.sequence_order}, "
            f"default={status.is_default}) by {actor_id or 'system'}"
        )
        return status

    def update(
        self,
        status_id: str,
        patch: Dict[str, Any],
        actor_id: Optional[str] = None,
    ) -> Status:
        """
        Apply a partial update to a status.

        A rename is carried over to every task and transition holding the old
        name in the same transaction.

        Args:
            status_id: Status to update.
            patch: Fields to change (subset of UPDATABLE_FIELDS).
            actor_id: Acting user, recorded in logs.

        Returns:
            Updated Status.

        Raises:
            NotFoundError: If status_id is unknown.
            ValidationError: If the patch names unknown fields or an empty name.
            ConflictError: If a rename collides with another status.
        """
        unknown = set(patch) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update status fields: {', '.join(sorted(unknown))}"
            )

        with self.store.transaction():
            status = self.get(status_id)
            old_name = status.name

            if "name" in patch:
                new_name = normalize_status_name(patch["name"])
                if not new_name:
                    raise ValidationError("Status name is required")
                clash = self.store.find_status_by_name(new_name)
                if clash is not None and clash.id != status_id:
                    raise ConflictError("Status", new_name)
                status.name = new_name

            for field_name in ("description", "color", "sequence_order", "can_delete"):
                if field_name in patch:
                    setattr(status, field_name, patch[field_name])

            if "is_default" in patch:
                if patch["is_default"]:
                    self._clear_default(self.store.list_statuses(), keep_id=status_id)
                status.is_default = bool(patch["is_default"])

            status.updated_at = utc_timestamp()
            self.store.update_status(status)

            if status.name != old_name:
                self._cascade_rename(old_name, status.name)

        logger.info(f"Status updated: {status.name} by {actor_id or 'system'}")
        return status

    def set_default(self, status_id: str, actor_id: Optional[str] = None) -> Status:
        """Mark one status as the default."""
        return self.update(status_id, {"is_default": True}, actor_id=actor_id)

    def reorder(
        self, ordered_ids: Sequence[str], actor_id: Optional[str] = None
    ) -> List[Status]:
        """
        Renumber every status 1..N following the given id order.

        The whole renumbering is committed as one batch.

        Args:
            ordered_ids: Every status id exactly once, in the new order.
            actor_id: Acting user, recorded in logs.

        Returns:
            Statuses in their new order.

        Raises:
            ValidationError: If ids repeat or the list does not cover every status.
            NotFoundError: If an id is unknown.
        """
        ordered_ids = list(ordered_ids)
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Reorder list contains duplicate status ids")

        with self.store.transaction():
            by_id = {s.id: s for s in self.store.list_statuses()}
            for status_id in ordered_ids:
                if status_id not in by_id:
                    raise NotFoundError("Status", status_id)
            missing = set(by_id) - set(ordered_ids)
            if missing:
                raise ValidationError(
                    f"Reorder list must include every status; missing {len(missing)}"
                )

            now = utc_timestamp()
            result = []
            for position, status_id in enumerate(ordered_ids, start=1):
                status = by_id[status_id]
                if status.sequence_order != position:
                    status.sequence_order = position
                    status.updated_at = now
                    self.store.update_status(status)
                result.append(status)

        logger.info(f"Statuses reordered ({len(result)}) by {actor_id or 'system'}")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _clear_default(self, statuses: List[Status], keep_id: Optional[str] = None) -> None:
        """Unset is_default on every status except keep_id (within a transaction)."""
        for other in statuses:
            if other.is_default and other.id != keep_id:
                other.is_default = False
                other.updated_at = utc_timestamp()
                self.store.update_status(other)
                logger.debug(f"Cleared default flag on {other.name}")

    def _cascade_rename(self, old_name: str, new_name: str) -> None:
        """Rewrite tasks and transitions holding old_name (within a transaction)."""
        task_ids = self.store.list_tasks_by_status(old_name)
        for task_id in task_ids:
            self.store.update_task_status(task_id, new_name)

        edges = 0
        for transition in self.store.list_transitions():
            changed = False
            if transition.from_status == old_name:
                transition.from_status = new_name
                changed = True
            if transition.to_status == old_name:
                transition.to_status = new_name
                changed = True
            if changed:
                self.store.update_transition(transition)
                edges += 1

        logger.debug(
            f"Renamed {old_name} -> {new_name}: {len(task_ids)} tasks, {edges} transitions"
        )
