"""Core package: domain model, exceptions, and naming helpers."""

from statusflow.core.models import (
    Status,
    Transition,
    Task,
    TaskActivity,
    DeletionPolicy,
    DeletionPreview,
    DeletionOutcome,
)
from statusflow.core.exceptions import (
    StatusFlowError,
    ValidationError,
    NotFoundError,
    ConflictError,
    StorageError,
    TransitionDeniedError,
    WorkflowFileError,
)
from statusflow.core.naming import (
    new_record_id,
    utc_timestamp,
    normalize_status_name,
)

__all__ = [
    "Status",
    "Transition",
    "Task",
    "TaskActivity",
    "DeletionPolicy",
    "DeletionPreview",
    "DeletionOutcome",
    "StatusFlowError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "TransitionDeniedError",
    "WorkflowFileError",
    "new_record_id",
    "utc_timestamp",
    "normalize_status_name",
]
