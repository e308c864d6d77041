#!/usr/bin/env python3
"""
flowctl: Task status lifecycle management CLI.

Commands:
  init        Prepare the data directory, optionally seeding a workflow file
  status      List, create, update, reorder statuses or set the default
  transition  List, add, remove transitions; check moves and next statuses
  delete      Preview or execute deletion of a status
  task        Add, list, move and complete tasks; per-status counts
  workflow    Export statuses and transitions as YAML
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from statusflow.cli import FlowCLI
from statusflow.constants import (
    COMPLETED_STATUS,
    COMPLETED_STATUS_ENV_VAR,
    POLICY_DELETE_TASKS,
    POLICY_REASSIGN_TASKS,
)
from statusflow.core.exceptions import StatusFlowError


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the flowctl argument parser."""
    parser = argparse.ArgumentParser(
        prog="flowctl", description="Task status lifecycle management CLI"
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Data directory (default: $STATUSFLOW_DATA_DIR or ./.statusflow)",
    )
    parser.add_argument(
        "--actor",
        default=os.environ.get("USER"),
        help="Acting user id recorded on changes (default: $USER)",
    )
    parser.add_argument(
        "--completed-status",
        default=os.environ.get(COMPLETED_STATUS_ENV_VAR, COMPLETED_STATUS),
        help="Terminal status used by 'task complete' (default: Completed)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # 'init' command
    init_parser = subparsers.add_parser("init", help="Prepare the data directory")
    init_parser.add_argument("--workflow", help="YAML workflow file to seed from")

    # 'status' commands
    status_parser = subparsers.add_parser("status", help="Manage statuses")
    status_sub = status_parser.add_subparsers(dest="action")

    status_list = status_sub.add_parser("list", help="List statuses in order")
    status_list.add_argument("--json", action="store_true", help="Output as JSON")

    status_create = status_sub.add_parser("create", help="Create a status")
    status_create.add_argument("name", help="Status name")
    status_create.add_argument("--color", help="Display color (default: #6b7280)")
    status_create.add_argument("--description", help="Description")
    status_create.add_argument(
        "--sequence-order", type=int, default=None, help="Position (default: last)"
    )
    status_create.add_argument(
        "--default", action="store_true", help="Make this the default status"
    )
    status_create.add_argument(
        "--protected", action="store_true", help="Prevent this status from being deleted"
    )

    status_update = status_sub.add_parser("update", help="Update a status")
    status_update.add_argument("status", help="Status id or name")
    status_update.add_argument("--name", help="New name (renames tasks and transitions)")
    status_update.add_argument("--color", help="New color")
    status_update.add_argument("--description", help="New description")
    status_update.add_argument("--sequence-order", type=int, default=None, help="New position")

    status_reorder = status_sub.add_parser(
        "reorder", help="Renumber statuses in the given order"
    )
    status_reorder.add_argument("statuses", nargs="+", help="Every status id or name, in order")

    status_default = status_sub.add_parser("default", help="Set the default status")
    status_default.add_argument("status", help="Status id or name")

    # 'transition' commands
    transition_parser = subparsers.add_parser("transition", help="Manage transitions")
    transition_sub = transition_parser.add_subparsers(dest="action")

    transition_list = transition_sub.add_parser("list", help="List transitions")
    transition_list.add_argument("--json", action="store_true", help="Output as JSON")

    transition_add = transition_sub.add_parser("add", help="Allow a move between statuses")
    transition_add.add_argument("from_status", help="Source status name")
    transition_add.add_argument("to_status", help="Target status name")

    transition_remove = transition_sub.add_parser("remove", help="Remove a transition")
    transition_remove.add_argument("id", help="Transition id")

    transition_check = transition_sub.add_parser("check", help="Check whether a move is allowed")
    transition_check.add_argument("from_status", help="Current status name")
    transition_check.add_argument("to_status", help="Candidate status name")

    transition_next = transition_sub.add_parser("next", help="List allowed next statuses")
    transition_next.add_argument("status", help="Current status name")
    transition_next.add_argument("--json", action="store_true", help="Output as JSON")

    transition_sub.add_parser("sequence", help="Show the forward workflow sequence")

    # 'delete' commands
    delete_parser = subparsers.add_parser("delete", help="Delete a status safely")
    delete_sub = delete_parser.add_subparsers(dest="action")

    delete_preview = delete_sub.add_parser("preview", help="Show deletion impact")
    delete_preview.add_argument("status", help="Status id or name")
    delete_preview.add_argument("--json", action="store_true", help="Output as JSON")

    delete_execute = delete_sub.add_parser("execute", help="Delete a status")
    delete_execute.add_argument("status", help="Status id or name")
    delete_execute.add_argument(
        "--policy",
        required=True,
        choices=[POLICY_REASSIGN_TASKS, POLICY_DELETE_TASKS],
        help="What to do with tasks holding the status",
    )
    delete_execute.add_argument(
        "--target", help="Status id or name to reassign tasks to (reassign_tasks)"
    )

    # 'task' commands
    task_parser = subparsers.add_parser("task", help="Manage tasks")
    task_sub = task_parser.add_subparsers(dest="action")

    task_add = task_sub.add_parser("add", help="Add a task")
    task_add.add_argument("title", help="Task title")
    task_add.add_argument("--status", help="Initial status (default: default status)")
    task_add.add_argument("--id", help="Task id (default: generated)")

    task_list = task_sub.add_parser("list", help="List tasks by status")
    task_list.add_argument("--status", help="Only tasks in this status")
    task_list.add_argument("--json", action="store_true", help="Output as JSON")

    task_move = task_sub.add_parser("move", help="Move a task to another status")
    task_move.add_argument("id", help="Task id")
    task_move.add_argument("status", help="Target status name")

    task_complete = task_sub.add_parser("complete", help="Move a task to completed")
    task_complete.add_argument("id", help="Task id")

    task_stats = task_sub.add_parser("stats", help="Task count per status")
    task_stats.add_argument("--json", action="store_true", help="Output as JSON")

    # 'workflow' commands
    workflow_parser = subparsers.add_parser("workflow", help="Workflow files")
    workflow_sub = workflow_parser.add_subparsers(dest="action")
    workflow_export = workflow_sub.add_parser("export", help="Export workflow as YAML")
    workflow_export.add_argument("--output", "-o", help="File to write (default: stdout)")

    return parser


COMMANDS = {
    ("init", None): "cmd_init",
    ("status", "list"): "cmd_status_list",
    ("status", "create"): "cmd_status_create",
    ("status", "update"): "cmd_status_update",
    ("status", "reorder"): "cmd_status_reorder",
    ("status", "default"): "cmd_status_default",
    ("transition", "list"): "cmd_transition_list",
    ("transition", "add"): "cmd_transition_add",
    ("transition", "remove"): "cmd_transition_remove",
    ("transition", "check"): "cmd_transition_check",
    ("transition", "next"): "cmd_transition_next",
    ("transition", "sequence"): "cmd_transition_sequence",
    ("delete", "preview"): "cmd_delete_preview",
    ("delete", "execute"): "cmd_delete_execute",
    ("task", "add"): "cmd_task_add",
    ("task", "list"): "cmd_task_list",
    ("task", "move"): "cmd_task_move",
    ("task", "complete"): "cmd_task_complete",
    ("task", "stats"): "cmd_task_stats",
    ("workflow", "export"): "cmd_workflow_export",
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for flowctl CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if not args.command:
        parser.print_help()
        return 1

    handler_name = COMMANDS.get((args.command, getattr(args, "action", None)))
    if handler_name is None:
        parser.print_help()
        return 1

    # Create CLI instance and execute command
    try:
        cli = FlowCLI(
            data_dir=args.data_dir,
            actor_id=args.actor,
            completed_status=args.completed_status,
        )
    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return getattr(cli, handler_name)(args)


if __name__ == "__main__":
    sys.exit(main())
