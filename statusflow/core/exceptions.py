"""Core exceptions: the error taxonomy surfaced by lifecycle operations."""

from typing import List, Optional


class StatusFlowError(Exception):
    """Base exception for all status lifecycle errors."""

    pass


class ValidationError(StatusFlowError):
    """Raised for malformed input the caller can fix (self-loops, missing fields, bad policy)."""

    pass


class NotFoundError(StatusFlowError):
    """Raised when a referenced status, transition or task does not exist."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ConflictError(ValidationError):
    """Raised when a write would duplicate an existing status name or edge."""

    def __init__(self, entity: str, key: str, message: Optional[str] = None):
        self.entity = entity
        self.key = key
        super().__init__(message or f"{entity} already exists: {key}")


class StorageError(StatusFlowError):
    """Raised when the underlying store fails to read or write."""

    pass


class TransitionDeniedError(ValidationError):
    """Raised when a task may not move between two statuses.

    Carries the legal next statuses so the caller can present alternatives.
    """

    def __init__(self, from_status: str, to_status: str, allowed: List[str]):
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = list(allowed)
        allowed_text = ", ".join(self.allowed) if self.allowed else "none"
        super().__init__(
            f'Cannot move from "{from_status}" to "{to_status}". '
            f"Allowed next statuses: {allowed_text}"
        )


class WorkflowFileError(ValidationError):
    """Raised when a workflow definition file cannot be parsed or applied."""

    pass
