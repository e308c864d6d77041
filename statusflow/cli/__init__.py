"""
flowctl CLI command implementations.

This package contains individual command handlers for the flowctl CLI.
Commands are grouped by what they manage: statuses, transitions, deletion,
tasks, and workflow files.

Public API:
- FlowCLI: Facade holding the store and lifecycle the handlers operate on
"""

import argparse
from typing import Optional

from statusflow.cli import cmd_statuses as _cmd_statuses_module
from statusflow.cli import cmd_transitions as _cmd_transitions_module
from statusflow.cli import cmd_delete as _cmd_delete_module
from statusflow.cli import cmd_tasks as _cmd_tasks_module
from statusflow.cli import cmd_workflow as _cmd_workflow_module
from statusflow.constants import COMPLETED_STATUS
from statusflow.core.exceptions import NotFoundError
from statusflow.core.models import Status
from statusflow.lifecycle import Lifecycle
from statusflow.store import JsonlStore


class FlowCLI:
    """flowctl CLI interface.

    Handlers receive this instance and reach the lifecycle through it.
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        actor_id: Optional[str] = None,
        completed_status: str = COMPLETED_STATUS,
    ):
        """Initialize CLI with a JSONL store under data_dir."""
        self.store = JsonlStore(data_dir)
        self.lifecycle = Lifecycle(self.store, completed_status=completed_status)
        self.actor_id = actor_id

    def resolve_status(self, ref: str) -> Status:
        """Find a status by id, falling back to name.

        Raises:
            NotFoundError: If neither matches.
        """
        status = self.store.get_status(ref)
        if status is not None:
            return status
        try:
            return self.lifecycle.registry.get_by_name(ref)
        except NotFoundError:
            raise NotFoundError("Status", ref)

    # Statuses
    def cmd_status_list(self, args: argparse.Namespace) -> int:
        return _cmd_statuses_module.cmd_status_list(self, args)

    def cmd_status_create(self, args: argparse.Namespace) -> int:
        return _cmd_statuses_module.cmd_status_create(self, args)

    def cmd_status_update(self, args: argparse.Namespace) -> int:
        return _cmd_statuses_module.cmd_status_update(self, args)

    def cmd_status_reorder(self, args: argparse.Namespace) -> int:
        return _cmd_statuses_module.cmd_status_reorder(self, args)

    def cmd_status_default(self, args: argparse.Namespace) -> int:
        return _cmd_statuses_module.cmd_status_default(self, args)

    # Transitions
    def cmd_transition_list(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_list(self, args)

    def cmd_transition_add(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_add(self, args)

    def cmd_transition_remove(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_remove(self, args)

    def cmd_transition_check(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_check(self, args)

    def cmd_transition_next(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_next(self, args)

    def cmd_transition_sequence(self, args: argparse.Namespace) -> int:
        return _cmd_transitions_module.cmd_transition_sequence(self, args)

    # Deletion
    def cmd_delete_preview(self, args: argparse.Namespace) -> int:
        return _cmd_delete_module.cmd_delete_preview(self, args)

    def cmd_delete_execute(self, args: argparse.Namespace) -> int:
        return _cmd_delete_module.cmd_delete_execute(self, args)

    # Tasks
    def cmd_task_add(self, args: argparse.Namespace) -> int:
        return _cmd_tasks_module.cmd_task_add(self, args)

    def cmd_task_list(self, args: argparse.Namespace) -> int:
        return _cmd_tasks_module.cmd_task_list(self, args)

    def cmd_task_move(self, args: argparse.Namespace) -> int:
        return _cmd_tasks_module.cmd_task_move(self, args)

    def cmd_task_complete(self, args: argparse.Namespace) -> int:
        return _cmd_tasks_module.cmd_task_complete(self, args)

    def cmd_task_stats(self, args: argparse.Namespace) -> int:
        return _cmd_tasks_module.cmd_task_stats(self, args)

    # Workflow files
    def cmd_init(self, args: argparse.Namespace) -> int:
        return _cmd_workflow_module.cmd_init(self, args)

    def cmd_workflow_export(self, args: argparse.Namespace) -> int:
        return _cmd_workflow_module.cmd_workflow_export(self, args)


__all__ = [
    "FlowCLI",
]
