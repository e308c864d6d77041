"""
Table-backed store shared by the JSONL and in-memory backends.

Every public operation runs inside a transaction. A transaction loads tables
lazily, stages writes in memory, and hands only the modified tables to the
backend on a clean exit. Backends supply loading, committing and the
inter-process lock; the record logic lives here.
"""

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set

from statusflow.core.exceptions import ConflictError, NotFoundError
from statusflow.core.models import Status, Transition, Task, TaskActivity
from statusflow.core.naming import utc_timestamp


logger = logging.getLogger(__name__)

# Commit order: task rows first, status rows last. A crash between file
# replacements leaves tasks pointing at statuses that still exist.
TABLE_ORDER = ("tasks", "activity", "transitions", "statuses")

TABLE_MODELS = {
    "statuses": Status,
    "transitions": Transition,
    "tasks": Task,
    "activity": TaskActivity,
}


class _Session:
    """Staged state of one open transaction."""

    def __init__(self):
        self.tables: Dict[str, List[Any]] = {}
        self.dirty: Set[str] = set()


class TableStore:
    """Base store implementing the lifecycle store protocol over four tables."""

    def __init__(self):
        self._lock = threading.RLock()
        self._session: Optional[_Session] = None

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    def _acquire_backend_lock(self) -> None:
        """Acquire any inter-process lock (no-op by default)."""

    def _release_backend_lock(self) -> None:
        """Release the inter-process lock (no-op by default)."""

    def _load_table(self, name: str) -> List[Any]:
        raise NotImplementedError

    def _commit_tables(self, tables: Dict[str, List[Any]]) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["TableStore"]:
        """
        Open a unit of work, or join the one already open on this thread.

        Staged writes are committed when the outermost block exits cleanly
        and discarded when it raises.
        """
        with self._lock:
            if self._session is not None:
                yield self
                return

            self._acquire_backend_lock()
            try:
                self._session = _Session()
                yield self
                session = self._session
                if session.dirty:
                    changed = {
                        name: session.tables[name]
                        for name in TABLE_ORDER
                        if name in session.dirty
                    }
                    self._commit_tables(changed)
                    logger.debug(f"Committed tables: {', '.join(changed)}")
            finally:
                self._session = None
                self._release_backend_lock()

    def _table(self, name: str) -> List[Any]:
        """Return the staged rows for a table (must be called within a transaction)."""
        session = self._session
        if name not in session.tables:
            session.tables[name] = self._load_table(name)
        return session.tables[name]

    def _mark_dirty(self, name: str) -> None:
        self._session.dirty.add(name)

    @staticmethod
    def _index_of(rows: List[Any], record_id: str) -> Optional[int]:
        for idx, row in enumerate(rows):
            if row.id == record_id:
                return idx
        return None

    # ------------------------------------------------------------------
    # Statuses
    # ------------------------------------------------------------------

    def list_statuses(self) -> List[Status]:
        with self.transaction():
            return [copy.copy(s) for s in self._table("statuses")]

    def get_status(self, status_id: str) -> Optional[Status]:
        with self.transaction():
            rows = self._table("statuses")
            idx = self._index_of(rows, status_id)
            return copy.copy(rows[idx]) if idx is not None else None

    def find_status_by_name(self, name: str) -> Optional[Status]:
        with self.transaction():
            for s in self._table("statuses"):
                if s.name == name:
                    return copy.copy(s)
            return None

    def add_status(self, status: Status) -> None:
        status.validate()
        with self.transaction():
            rows = self._table("statuses")
            if self._index_of(rows, status.id) is not None:
                raise ConflictError("Status", status.id)
            rows.append(copy.copy(status))
            self._mark_dirty("statuses")

    def update_status(self, status: Status) -> None:
        status.validate()
        with self.transaction():
            rows = self._table("statuses")
            idx = self._index_of(rows, status.id)
            if idx is None:
                raise NotFoundError("Status", status.id)
            rows[idx] = copy.copy(status)
            self._mark_dirty("statuses")

    def delete_status(self, status_id: str) -> None:
        with self.transaction():
            rows = self._table("statuses")
            idx = self._index_of(rows, status_id)
            if idx is None:
                raise NotFoundError("Status", status_id)
            del rows[idx]
            self._mark_dirty("statuses")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def list_transitions(
        self,
        from_status: Optional[str] = None,
        to_status: Optional[str] = None,
    ) -> List[Transition]:
        with self.transaction():
            return [
                copy.copy(t)
                for t in self._table("transitions")
                if (from_status is None or t.from_status == from_status)
                and (to_status is None or t.to_status == to_status)
            ]

    def get_transition(self, transition_id: str) -> Optional[Transition]:
        with self.transaction():
            rows = self._table("transitions")
            idx = self._index_of(rows, transition_id)
            return copy.copy(rows[idx]) if idx is not None else None

    def add_transition(self, transition: Transition) -> None:
        transition.validate()
        with self.transaction():
            rows = self._table("transitions")
            if self._index_of(rows, transition.id) is not None:
                raise ConflictError("Transition", transition.id)
            rows.append(copy.copy(transition))
            self._mark_dirty("transitions")

    def update_transition(self, transition: Transition) -> None:
        transition.validate()
        with self.transaction():
            rows = self._table("transitions")
            idx = self._index_of(rows, transition.id)
            if idx is None:
                raise NotFoundError("Transition", transition.id)
            rows[idx] = copy.copy(transition)
            self._mark_dirty("transitions")

    def delete_transition(self, transition_id: str) -> None:
        with self.transaction():
            rows = self._table("transitions")
            idx = self._index_of(rows, transition_id)
            if idx is None:
                raise NotFoundError("Transition", transition_id)
            del rows[idx]
            self._mark_dirty("transitions")

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(self, task: Task) -> None:
        with self.transaction():
            rows = self._table("tasks")
            if self._index_of(rows, task.id) is not None:
                raise ConflictError("Task", task.id)
            rows.append(copy.copy(task))
            self._mark_dirty("tasks")

    def get_task(self, task_id: str) -> Optional[Task]:
        with self.transaction():
            rows = self._table("tasks")
            idx = self._index_of(rows, task_id)
            return copy.copy(rows[idx]) if idx is not None else None

    def list_tasks(self) -> List[Task]:
        with self.transaction():
            return [copy.copy(t) for t in self._table("tasks")]

    def count_tasks_by_status(self, status_name: str) -> int:
        with self.transaction():
            return sum(1 for t in self._table("tasks") if t.status == status_name)

    def list_tasks_by_status(self, status_name: str) -> List[str]:
        with self.transaction():
            return [t.id for t in self._table("tasks") if t.status == status_name]

    def update_task_status(self, task_id: str, new_status: str) -> None:
        with self.transaction():
            rows = self._table("tasks")
            idx = self._index_of(rows, task_id)
            if idx is None:
                raise NotFoundError("Task", task_id)
            updated = copy.copy(rows[idx])
            updated.status = new_status
            updated.updated_at = utc_timestamp()
            rows[idx] = updated
            self._mark_dirty("tasks")

    def delete_task(self, task_id: str) -> None:
        with self.transaction():
            rows = self._table("tasks")
            idx = self._index_of(rows, task_id)
            if idx is None:
                raise NotFoundError("Task", task_id)
            del rows[idx]
            self._mark_dirty("tasks")

    # ------------------------------------------------------------------
    # Activity
    # ------------------------------------------------------------------

    def add_activity(self, activity: TaskActivity) -> None:
        with self.transaction():
            self._table("activity").append(copy.copy(activity))
            self._mark_dirty("activity")

    def list_activity(self, task_id: Optional[str] = None) -> List[TaskActivity]:
        with self.transaction():
            return [
                copy.copy(a)
                for a in self._table("activity")
                if task_id is None or a.task_id == task_id
            ]

    def clear(self) -> None:
        """Clear all tables (useful for testing)."""
        with self.transaction():
            for name in TABLE_ORDER:
                self._session.tables[name] = []
                self._mark_dirty(name)
