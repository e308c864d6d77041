"""
flowctl delete command implementations.

Status deletion is a two-step flow: preview the impact, then execute with
an explicit policy for the tasks still holding the status.
"""

import sys
import json
import argparse
import logging

from statusflow.core.exceptions import StatusFlowError
from statusflow.core.models import DeletionPolicy


logger = logging.getLogger(__name__)


def cmd_delete_preview(cli_instance, args: argparse.Namespace) -> int:
    """Show what deleting a status would touch.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: status, json (optional)

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        status = cli_instance.resolve_status(args.status)
        preview = cli_instance.lifecycle.deletion.preview(status.id)

        if args.json:
            print(json.dumps(preview.to_dict(), indent=2, default=str))
            return 0

        print(f"Status: {preview.status_name}")
        print(f"Tasks holding this status: {preview.task_count}")
        print(f"Referenced by transitions: {'yes' if preview.has_transitions else 'no'}")
        if not preview.can_delete:
            print("This status is protected and cannot be deleted.")
        if preview.available_statuses:
            names = ", ".join(s.name for s in preview.available_statuses)
            print(f"Reassignment candidates: {names}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_delete_execute(cli_instance, args: argparse.Namespace) -> int:
    """Delete a status, reassigning or deleting its tasks.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: status, policy, target (optional)

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        status = cli_instance.resolve_status(args.status)
        target_id = None
        if args.target:
            target_id = cli_instance.resolve_status(args.target).id

        outcome = cli_instance.lifecycle.deletion.execute(
            status.id,
            args.policy,
            target_status_id=target_id,
            actor_id=cli_instance.actor_id,
        )

        if outcome.policy is DeletionPolicy.REASSIGN_TASKS:
            print(
                f"Status deleted: {outcome.status_name}. Reassigned "
                f"{outcome.reassigned_tasks} tasks to \"{outcome.target_status}\" and "
                f"removed {outcome.removed_transitions} transitions."
            )
        else:
            print(
                f"Status deleted: {outcome.status_name}. Deleted "
                f"{outcome.deleted_tasks} tasks and removed "
                f"{outcome.removed_transitions} transitions."
            )
        return 0

    except StatusFlowError as e:
        logger.warning(f"Status deletion refused: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
