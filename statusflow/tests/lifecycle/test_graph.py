"""
Tests for TransitionGraph edge management.
"""

import pytest

from statusflow.core.exceptions import ConflictError, NotFoundError, ValidationError


class TestAddEdge:
    """Test TransitionGraph.add_edge."""

    def test_add_edge(self, seeded):
        transition = seeded.graph.add_edge("New", "Completed", actor_id="admin")
        assert transition.from_status == "New"
        assert transition.to_status == "Completed"
        assert transition.created_by == "admin"
        assert seeded.graph.has_edge("New", "Completed")

    def test_self_loop_rejected(self, seeded):
        """Test that a self-loop is a ValidationError."""
        with pytest.raises(ValidationError):
            seeded.graph.add_edge("Completed", "Completed")

    def test_duplicate_edge_conflict(self, seeded):
        """Test that adding the same edge twice is a ConflictError."""
        with pytest.raises(ConflictError):
            seeded.graph.add_edge("New", "In Progress")

    def test_unknown_status(self, seeded):
        with pytest.raises(NotFoundError):
            seeded.graph.add_edge("New", "Archived")

    def test_cycles_allowed(self, seeded):
        """Test that back edges forming a cycle are accepted."""
        seeded.registry.create("On Hold")
        seeded.graph.add_edge("In Progress", "On Hold")
        seeded.graph.add_edge("On Hold", "In Progress")
        assert seeded.graph.has_edge("On Hold", "In Progress")
        assert seeded.graph.has_edge("In Progress", "On Hold")


class TestRemoveEdge:
    """Test TransitionGraph.remove_edge."""

    def test_remove_edge(self, seeded):
        edge = seeded.graph.find_edge("New", "In Progress")
        removed = seeded.graph.remove_edge(edge.id)
        assert removed.id == edge.id
        assert not seeded.graph.has_edge("New", "In Progress")

    def test_remove_missing_edge(self, seeded):
        with pytest.raises(NotFoundError):
            seeded.graph.remove_edge("no-such-id")

    def test_remove_twice(self, seeded):
        edge = seeded.graph.find_edge("New", "In Progress")
        seeded.graph.remove_edge(edge.id)
        with pytest.raises(NotFoundError):
            seeded.graph.remove_edge(edge.id)


class TestQueries:
    """Test adjacency queries."""

    def test_outgoing_in_insertion_order(self, seeded):
        """Test that outgoing_from follows edge insertion order, not name order."""
        seeded.registry.create("Blocked")
        seeded.registry.create("Archived")
        seeded.graph.add_edge("In Progress", "Blocked")
        seeded.graph.add_edge("In Progress", "Archived")
        assert seeded.graph.outgoing_from("In Progress") == [
            "Completed",
            "Blocked",
            "Archived",
        ]

    def test_incoming_and_mentions(self, seeded):
        assert seeded.graph.incoming_to("Completed") == ["In Progress"]
        assert seeded.graph.mentions("New")
        seeded.registry.create("Orphan")
        assert not seeded.graph.mentions("Orphan")

    def test_remove_edges_touching(self, seeded):
        removed = seeded.graph.remove_edges_touching("In Progress")
        assert removed == 2
        assert seeded.graph.list_transitions() == []


class TestStatusSequence:
    """Test forward workflow sequence derivation."""

    def test_linear_sequence(self, seeded):
        assert seeded.graph.status_sequence() == ["New", "In Progress", "Completed"]

    def test_sequence_ignores_back_edges(self, seeded):
        seeded.registry.create("On Hold")
        seeded.graph.add_edge("In Progress", "On Hold")
        seeded.graph.add_edge("On Hold", "In Progress")
        assert seeded.graph.status_sequence() == [
            "New",
            "In Progress",
            "Completed",
        ]

    def test_sequence_when_every_status_has_incoming(self, lifecycle):
        """Test fallback to the first edge's source for a pure cycle."""
        for name in ("A", "B"):
            lifecycle.registry.create(name)
        lifecycle.graph.add_edge("B", "A")
        lifecycle.graph.add_edge("A", "B")
        assert lifecycle.graph.status_sequence() == ["B", "A"]

    def test_empty_graph(self, lifecycle):
        assert lifecycle.graph.status_sequence() == []
