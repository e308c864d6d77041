"""Core domain model: statuses, transitions, tasks, and deletion planning records."""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, Any, List, Optional

from statusflow.constants import (
    DEFAULT_STATUS_COLOR,
    POLICY_REASSIGN_TASKS,
    POLICY_DELETE_TASKS,
)
from statusflow.core.exceptions import ValidationError


@dataclass
class Status:
    """A named workflow stage a task can be in."""

    id: str
    name: str  # Unique across statuses
    sequence_order: int
    color: str = DEFAULT_STATUS_COLOR
    description: Optional[str] = None
    is_default: bool = False
    can_delete: bool = True
    created_at: str = ""
    updated_at: str = ""

    def validate(self) -> None:
        """Validate field values at write-time."""
        if not self.name or not self.name.strip():
            raise ValidationError("Status name is required")
        if isinstance(self.sequence_order, bool) or not isinstance(
            self.sequence_order, int
        ):
            raise ValidationError(
                f"Status sequence_order must be an integer, got {self.sequence_order!r}"
            )
        if not self.color:
            raise ValidationError("Status color is required")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Status":
        """Create Status from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Status to dictionary."""
        return asdict(self)


@dataclass
class Transition:
    """One directed edge in the lifecycle graph, keyed by status names."""

    id: str
    from_status: str
    to_status: str
    created_at: str = ""
    created_by: Optional[str] = None

    def validate(self) -> None:
        """Reject empty endpoints and self-loops."""
        if not self.from_status or not self.to_status:
            raise ValidationError("Transition requires both from_status and to_status")
        if self.from_status == self.to_status:
            raise ValidationError(
                f"Transition cannot start and end at the same status: {self.from_status}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transition":
        """Create Transition from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Transition to dictionary."""
        return asdict(self)


@dataclass
class Task:
    """The slice of a task record the lifecycle touches."""

    id: str
    title: str
    status: str
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create Task from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Task to dictionary."""
        return asdict(self)


@dataclass
class TaskActivity:
    """Audit row written whenever a task's status changes or the task is removed."""

    id: str
    task_id: str
    action_type: str
    old_value: Optional[str]
    new_value: Optional[str]
    acted_by: Optional[str]
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TaskActivity":
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DeletionPolicy(str, Enum):
    """How tasks holding a status are handled when the status is deleted."""

    REASSIGN_TASKS = POLICY_REASSIGN_TASKS
    DELETE_TASKS = POLICY_DELETE_TASKS

    @classmethod
    def parse(cls, value) -> "DeletionPolicy":
        """
        Coerce a policy name into a DeletionPolicy.

        Args:
            value: DeletionPolicy or its string value.

        Returns:
            Matching DeletionPolicy.

        Raises:
            ValidationError: If value is missing or not a known policy.
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise ValidationError(
                "A deletion policy is required: choose reassign_tasks or delete_tasks"
            )
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Invalid deletion policy '{value}'. Must be one of: {valid}"
            )


@dataclass
class DeletionPreview:
    """Read-only impact summary for a pending status deletion."""

    status_id: str
    status_name: str
    task_count: int
    available_statuses: List[Status]
    has_transitions: bool
    can_delete: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status_id": self.status_id,
            "status_name": self.status_name,
            "task_count": self.task_count,
            "available_statuses": [s.to_dict() for s in self.available_statuses],
            "has_transitions": self.has_transitions,
            "can_delete": self.can_delete,
        }


@dataclass
class DeletionOutcome:
    """Counts reported after a status deletion has been executed."""

    status_name: str
    policy: DeletionPolicy
    reassigned_tasks: int = 0
    deleted_tasks: int = 0
    removed_transitions: int = 0
    target_status: Optional[str] = None
    task_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, reporting only the count for the chosen policy."""
        result: Dict[str, Any] = {
            "status_name": self.status_name,
            "policy": self.policy.value,
            "removed_transitions": self.removed_transitions,
        }
        if self.policy is DeletionPolicy.REASSIGN_TASKS:
            result["reassigned_tasks"] = self.reassigned_tasks
            result["target_status"] = self.target_status
        else:
            result["deleted_tasks"] = self.deleted_tasks
        return result
