"""
Lifecycle validator: the single decision point for task status changes.
"""

import logging
from typing import List

from statusflow.core.exceptions import TransitionDeniedError
from statusflow.core.naming import normalize_status_name
from statusflow.lifecycle.graph import TransitionGraph


logger = logging.getLogger(__name__)


class LifecycleValidator:
    """Answers whether a task may move between two statuses.

    Staying in the same status is always allowed. Any other move needs an
    edge in the transition graph; a status that no longer exists has no
    edges, so moves involving it are denied rather than raising.
    """

    def __init__(self, graph: TransitionGraph):
        self.graph = graph

    def is_transition_allowed(self, from_status: str, to_status: str) -> bool:
        from_status = normalize_status_name(from_status)
        to_status = normalize_status_name(to_status)
        if from_status == to_status:
            return True
        allowed = self.graph.has_edge(from_status, to_status)
        logger.debug(f"Transition {from_status} -> {to_status}: allowed={allowed}")
        return allowed

    def get_allowed_next_statuses(self, from_status: str) -> List[str]:
        """Legal next statuses for presenting choices (excludes from_status itself)."""
        from_status = normalize_status_name(from_status)
        return [s for s in self.graph.outgoing_from(from_status) if s != from_status]

    def require_transition(self, from_status: str, to_status: str) -> None:
        """
        Raise unless the move is allowed.

        Raises:
            TransitionDeniedError: Carrying the allowed next statuses.
        """
        if not self.is_transition_allowed(from_status, to_status):
            raise TransitionDeniedError(
                from_status, to_status, self.get_allowed_next_statuses(from_status)
            )

    def is_moving_backwards(self, from_status: str, to_status: str) -> bool:
        """True if to_status precedes from_status in the derived workflow sequence."""
        from_status = normalize_status_name(from_status)
        to_status = normalize_status_name(to_status)
        sequence = self.graph.status_sequence()
        if from_status not in sequence or to_status not in sequence:
            return False
        return sequence.index(to_status) < sequence.index(from_status)
