"""
Tests for core models and the error taxonomy.
"""

import pytest

from statusflow.constants import DEFAULT_STATUS_COLOR
from statusflow.core.exceptions import (
    ConflictError,
    NotFoundError,
    StatusFlowError,
    TransitionDeniedError,
    ValidationError,
    WorkflowFileError,
)
from statusflow.core.models import (
    DeletionOutcome,
    DeletionPolicy,
    Status,
    Transition,
)
from statusflow.core.naming import normalize_status_name


class TestStatusValidation:
    """Test Status write-time validation."""

    def test_defaults(self):
        """Test that color and flags have sensible defaults."""
        status = Status(id="s1", name="New", sequence_order=1)
        assert status.color == DEFAULT_STATUS_COLOR
        assert status.is_default is False
        assert status.can_delete is True
        status.validate()

    def test_blank_name_rejected(self):
        """Test that a whitespace-only name is rejected."""
        with pytest.raises(ValidationError, match="name is required"):
            Status(id="s1", name="   ", sequence_order=1).validate()

    def test_non_integer_order_rejected(self):
        """Test that sequence_order must be an int (bools excluded)."""
        with pytest.raises(ValidationError, match="sequence_order"):
            Status(id="s1", name="New", sequence_order="2").validate()
        with pytest.raises(ValidationError, match="sequence_order"):
            Status(id="s1", name="New", sequence_order=True).validate()

    def test_round_trip_dict(self):
        """Test from_dict(to_dict()) preserves every field."""
        status = Status(id="s1", name="New", sequence_order=4, description="Fresh")
        assert Status.from_dict(status.to_dict()) == status


class TestTransitionValidation:
    """Test Transition write-time validation."""

    def test_self_loop_rejected(self):
        """Test that from_status == to_status is rejected."""
        with pytest.raises(ValidationError, match="same status"):
            Transition(id="t1", from_status="Done", to_status="Done").validate()

    def test_missing_endpoint_rejected(self):
        """Test that empty endpoints are rejected."""
        with pytest.raises(ValidationError):
            Transition(id="t1", from_status="", to_status="Done").validate()


class TestDeletionPolicy:
    """Test DeletionPolicy parsing."""

    def test_parse_strings(self):
        """Test that policy strings map to enum members."""
        assert DeletionPolicy.parse("reassign_tasks") is DeletionPolicy.REASSIGN_TASKS
        assert DeletionPolicy.parse("delete_tasks") is DeletionPolicy.DELETE_TASKS
        assert DeletionPolicy.parse(DeletionPolicy.DELETE_TASKS) is DeletionPolicy.DELETE_TASKS

    def test_missing_policy(self):
        """Test that no policy at all is a ValidationError."""
        with pytest.raises(ValidationError, match="policy is required"):
            DeletionPolicy.parse(None)

    def test_unknown_policy(self):
        """Test that an unknown policy name is a ValidationError."""
        with pytest.raises(ValidationError, match="Invalid deletion policy"):
            DeletionPolicy.parse("archive_tasks")


class TestDeletionOutcome:
    """Test DeletionOutcome serialisation."""

    def test_reassign_reports_reassigned_count(self):
        outcome = DeletionOutcome(
            status_name="In Progress",
            policy=DeletionPolicy.REASSIGN_TASKS,
            reassigned_tasks=2,
            target_status="Completed",
        )
        data = outcome.to_dict()
        assert data["reassigned_tasks"] == 2
        assert data["target_status"] == "Completed"
        assert "deleted_tasks" not in data

    def test_delete_reports_deleted_count(self):
        outcome = DeletionOutcome(
            status_name="Completed", policy=DeletionPolicy.DELETE_TASKS, deleted_tasks=3
        )
        data = outcome.to_dict()
        assert data["deleted_tasks"] == 3
        assert "reassigned_tasks" not in data


class TestErrors:
    """Test the error hierarchy."""

    def test_conflict_is_validation_error(self):
        """Test that duplicates can be caught as either error kind."""
        err = ConflictError("Status", "New")
        assert isinstance(err, ValidationError)
        assert isinstance(err, StatusFlowError)
        assert str(err) == "Status already exists: New"

    def test_not_found_carries_key(self):
        err = NotFoundError("Transition", "abc")
        assert err.entity == "Transition"
        assert err.key == "abc"
        assert not isinstance(err, ValidationError)

    def test_transition_denied_lists_alternatives(self):
        """Test that a denied move names the legal next statuses."""
        err = TransitionDeniedError("New", "Completed", ["In Progress"])
        assert isinstance(err, ValidationError)
        assert err.allowed == ["In Progress"]
        assert "Allowed next statuses: In Progress" in str(err)

    def test_transition_denied_without_alternatives(self):
        err = TransitionDeniedError("Completed", "New", [])
        assert "Allowed next statuses: none" in str(err)

    def test_workflow_file_error_is_validation_error(self):
        assert issubclass(WorkflowFileError, ValidationError)


class TestNaming:
    """Test naming helpers."""

    def test_normalize_status_name(self):
        assert normalize_status_name("  In Progress ") == "In Progress"
        assert normalize_status_name(None) == ""
