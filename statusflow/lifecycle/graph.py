"""
Transition graph: the directed edge set over status names.

Edges are single-hop permissions. Cycles are allowed; only self-loops and
duplicate (from, to) pairs are rejected. No closure is precomputed because
only direct transitions are ever validated.
"""

import logging
from typing import List, Optional

from statusflow.core.exceptions import ConflictError, NotFoundError, ValidationError
from statusflow.core.models import Transition
from statusflow.core.naming import new_record_id, normalize_status_name, utc_timestamp
from statusflow.store.protocol import LifecycleStore


logger = logging.getLogger(__name__)


class TransitionGraph:
    """Edge operations over the transition store, in edge insertion order."""

    def __init__(self, store: LifecycleStore):
        self.store = store

    def list_transitions(self) -> List[Transition]:
        return self.store.list_transitions()

    def add_edge(
        self, from_status: str, to_status: str, actor_id: Optional[str] = None
    ) -> Transition:
        """
        Permit moving from one status to another.

        Args:
            from_status: Source status name.
            to_status: Target status name.
            actor_id: Acting user, stored as created_by.

        Returns:
            The new Transition.

        Raises:
            ValidationError: If either name is empty or both are the same.
            NotFoundError: If either status does not exist.
            ConflictError: If the edge already exists.
        """
        from_status = normalize_status_name(from_status)
        to_status = normalize_status_name(to_status)
        if not from_status or not to_status:
            raise ValidationError("Transition requires both from_status and to_status")
        if from_status == to_status:
            raise ValidationError(
                f"Transition cannot start and end at the same status: {from_status}"
            )

        with self.store.transaction():
            for name in (from_status, to_status):
                if self.store.find_status_by_name(name) is None:
                    raise NotFoundError("Status", name)
            if self.has_edge(from_status, to_status):
                raise ConflictError("Transition", f"{from_status} -> {to_status}")

            transition = Transition(
                id=new_record_id(),
                from_status=from_status,
                to_status=to_status,
                created_at=utc_timestamp(),
                created_by=actor_id,
            )
            self.store.add_transition(transition)

        logger.info(
            f"Transition added: {from_status} -> {to_status} by {actor_id or 'system'}"
        )
        return transition

    def remove_edge(self, transition_id: str, actor_id: Optional[str] = None) -> Transition:
        """
        Remove one edge by id.

        Raises:
            NotFoundError: If no transition has this id.
        """
        with self.store.transaction():
            transition = self.store.get_transition(transition_id)
            if transition is None:
                raise NotFoundError("Transition", transition_id)
            self.store.delete_transition(transition_id)

        logger.info(
            f"Transition removed: {transition.from_status} -> {transition.to_status} "
            f"by {actor_id or 'system'}"
        )
        return transition

    def find_edge(self, from_status: str, to_status: str) -> Optional[Transition]:
        edges = self.store.list_transitions(from_status=from_status, to_status=to_status)
        return edges[0] if edges else None

    def has_edge(self, from_status: str, to_status: str) -> bool:
        return self.find_edge(from_status, to_status) is not None

    def outgoing_from(self, status_name: str) -> List[str]:
        """Status names reachable in one step, in edge insertion order."""
        return [t.to_status for t in self.store.list_transitions(from_status=status_name)]

    def incoming_to(self, status_name: str) -> List[str]:
        """Status names with an edge into status_name, in edge insertion order."""
        return [t.from_status for t in self.store.list_transitions(to_status=status_name)]

    def mentions(self, status_name: str) -> bool:
        """True if any edge starts or ends at status_name."""
        return any(
            t.from_status == status_name or t.to_status == status_name
            for t in self.store.list_transitions()
        )

    def remove_edges_touching(self, status_name: str) -> int:
        """
        Delete every edge that starts or ends at status_name.

        Returns:
            Number of edges removed.
        """
        removed = 0
        with self.store.transaction():
            for transition in self.store.list_transitions():
                if status_name in (transition.from_status, transition.to_status):
                    self.store.delete_transition(transition.id)
                    removed += 1
        logger.debug(f"Pruned {removed} transitions touching {status_name}")
        return removed

    def status_sequence(self) -> List[str]:
        """
        Forward workflow order derived from the edges.

        Starts at the first source status with no incoming edge (or the first
        edge's source when every status has one), then repeatedly follows the
        first edge to a status not yet visited.
        """
        transitions = self.store.list_transitions()
        if not transitions:
            return []

        targets = {t.to_status for t in transitions}
        start = transitions[0].from_status
        for t in transitions:
            if t.from_status not in targets:
                start = t.from_status
                break

        sequence = [start]
        visited = {start}
        current = start
        while True:
            step = next(
                (
                    t.to_status
                    for t in transitions
                    if t.from_status == current and t.to_status not in visited
                ),
                None,
            )
            if step is None:
                break
            sequence.append(step)
            visited.add(step)
            current = step
        return sequence
