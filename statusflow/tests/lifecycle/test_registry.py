"""
Tests for StatusRegistry: creation, defaults, updates, renames and reordering.
"""

import random

import pytest

from statusflow.core.exceptions import ConflictError, NotFoundError, ValidationError


def _defaults(registry):
    return [s.name for s in registry.list_statuses() if s.is_default]


class TestStatusCreate:
    """Test StatusRegistry.create."""

    def test_sequence_order_appends(self, lifecycle):
        """Test that omitted sequence_order becomes max + 1."""
        registry = lifecycle.registry
        assert registry.create("New").sequence_order == 1
        assert registry.create("Doing").sequence_order == 2
        registry.create("Parked", sequence_order=10)
        assert registry.create("Done").sequence_order == 11

    def test_name_is_trimmed(self, lifecycle):
        status = lifecycle.registry.create("  Review  ")
        assert status.name == "Review"
        assert lifecycle.registry.get_by_name("Review").id == status.id

    def test_empty_name_rejected(self, lifecycle):
        with pytest.raises(ValidationError, match="name is required"):
            lifecycle.registry.create("   ")

    def test_duplicate_name_rejected(self, lifecycle):
        """Test that a duplicate name is a ConflictError (also a ValidationError)."""
        lifecycle.registry.create("New")
        with pytest.raises(ConflictError):
            lifecycle.registry.create("New")
        with pytest.raises(ValidationError):
            lifecycle.registry.create(" New ")

    def test_default_color(self, lifecycle):
        assert lifecycle.registry.create("New").color == "#6b7280"

    def test_default_clears_previous(self, lifecycle):
        """Test that a new default unsets the old one."""
        registry = lifecycle.registry
        registry.create("New", is_default=True)
        registry.create("Backlog", is_default=True)
        assert _defaults(registry) == ["Backlog"]
        assert registry.get_default().name == "Backlog"

    def test_no_default_when_never_marked(self, lifecycle):
        lifecycle.registry.create("New")
        assert lifecycle.registry.get_default() is None


class TestStatusUpdate:
    """Test StatusRegistry.update."""

    def test_unknown_id(self, lifecycle):
        with pytest.raises(NotFoundError):
            lifecycle.registry.update("missing", {"color": "#fff"})

    def test_unknown_field(self, seeded):
        status = seeded.registry.get_by_name("New")
        with pytest.raises(ValidationError, match="Cannot update"):
            seeded.registry.update(status.id, {"id": "other"})

    def test_set_default_clears_others(self, seeded):
        registry = seeded.registry
        completed = registry.get_by_name("Completed")
        registry.update(completed.id, {"is_default": True})
        assert _defaults(registry) == ["Completed"]

    def test_setting_default_on_current_default_keeps_it(self, seeded):
        registry = seeded.registry
        new = registry.get_by_name("New")
        registry.set_default(new.id)
        assert _defaults(registry) == ["New"]

    def test_unset_default(self, seeded):
        registry = seeded.registry
        registry.update(registry.get_by_name("New").id, {"is_default": False})
        assert registry.get_default() is None

    def test_rename_conflict(self, seeded):
        registry = seeded.registry
        with pytest.raises(ConflictError):
            registry.update(registry.get_by_name("New").id, {"name": "Completed"})

    def test_rename_cascades_to_tasks_and_transitions(self, seeded):
        """Test that renaming keeps tasks and edges pointing at the status."""
        task = seeded.tasks.create_task("Write report", status="In Progress")
        status = seeded.registry.get_by_name("In Progress")

        seeded.registry.update(status.id, {"name": "Doing"})

        assert seeded.tasks.get(task.id).status == "Doing"
        assert seeded.graph.outgoing_from("New") == ["Doing"]
        assert seeded.graph.outgoing_from("Doing") == ["Completed"]
        assert not seeded.graph.mentions("In Progress")

    def test_invalid_sequence_order_rolls_back(self, seeded):
        """Test that a rejected patch leaves the status unchanged."""
        status = seeded.registry.get_by_name("New")
        with pytest.raises(ValidationError):
            seeded.registry.update(status.id, {"sequence_order": "first", "color": "#000"})
        assert seeded.registry.get(status.id).color == status.color


class TestSingleDefaultInvariant:
    """Property: at most one default after any create/update sequence."""

    def test_random_default_sequences(self, lifecycle):
        registry = lifecycle.registry
        rng = random.Random(7)
        for step in range(60):
            statuses = registry.list_statuses()
            if not statuses or rng.random() < 0.3:
                registry.create(f"S{step}", is_default=rng.random() < 0.5)
            else:
                target = rng.choice(statuses)
                registry.update(target.id, {"is_default": rng.random() < 0.7})
            assert len(_defaults(registry)) <= 1


class TestReorder:
    """Test StatusRegistry.reorder."""

    def test_dense_renumbering(self, lifecycle):
        """Test that reorder yields exactly 1..N in the given order."""
        registry = lifecycle.registry
        a = registry.create("A", sequence_order=5)
        b = registry.create("B", sequence_order=9)
        c = registry.create("C", sequence_order=40)

        result = registry.reorder([c.id, a.id, b.id])

        assert [s.name for s in result] == ["C", "A", "B"]
        assert [s.name for s in registry.list_statuses()] == ["C", "A", "B"]
        assert sorted(s.sequence_order for s in registry.list_statuses()) == [1, 2, 3]

    def test_reorder_requires_every_status(self, seeded):
        ids = [s.id for s in seeded.registry.list_statuses()]
        with pytest.raises(ValidationError, match="every status"):
            seeded.registry.reorder(ids[:2])

    def test_reorder_rejects_duplicates(self, seeded):
        ids = [s.id for s in seeded.registry.list_statuses()]
        with pytest.raises(ValidationError, match="duplicate"):
            seeded.registry.reorder(ids + ids[:1])

    def test_reorder_unknown_id(self, seeded):
        ids = [s.id for s in seeded.registry.list_statuses()]
        with pytest.raises(NotFoundError):
            seeded.registry.reorder(ids[:2] + ["ghost"])

    def test_failed_reorder_changes_nothing(self, seeded):
        before = [(s.name, s.sequence_order) for s in seeded.registry.list_statuses()]
        ids = [s.id for s in seeded.registry.list_statuses()]
        with pytest.raises(NotFoundError):
            seeded.registry.reorder(list(reversed(ids[1:])) + ["ghost"])
        after = [(s.name, s.sequence_order) for s in seeded.registry.list_statuses()]
        assert before == after


class TestRegistryHasNoDirectDelete:
    """Statuses are only removed through the deletion planner."""

    def test_no_delete_method(self, lifecycle):
        assert not hasattr(lifecycle.registry, "delete")
