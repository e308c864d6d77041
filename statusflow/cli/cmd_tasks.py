"""
flowctl task command implementations.

Handles task creation and status moves. Every move is checked against the
transition graph; denied moves report the allowed next statuses.
"""

import sys
import json
import argparse

from statusflow.core.exceptions import StatusFlowError


def cmd_task_add(cli_instance, args: argparse.Namespace) -> int:
    """Add a task in the given status or the default status.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        task = cli_instance.lifecycle.tasks.create_task(
            args.title,
            status=args.status,
            actor_id=cli_instance.actor_id,
            task_id=args.id,
        )
        print(f"Task added: {task.id} ({task.status})")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_task_list(cli_instance, args: argparse.Namespace) -> int:
    """List tasks grouped by status in workflow order.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        tasks = cli_instance.lifecycle.tasks.list_tasks(status=args.status)

        if args.json:
            print(json.dumps([t.to_dict() for t in tasks], indent=2, default=str))
            return 0

        by_status = {}
        for task in tasks:
            by_status.setdefault(task.status, []).append(task)

        for name in cli_instance.lifecycle.registry.names():
            if name in by_status:
                print(f"\n{name.upper()}:")
                for task in by_status[name]:
                    print(f"  {task.id}  {task.title}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_task_move(cli_instance, args: argparse.Namespace) -> int:
    """Move a task to another status.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        task = cli_instance.lifecycle.tasks.change_status(
            args.id, args.status, actor_id=cli_instance.actor_id
        )
        print(f"Task moved: {task.id} -> {task.status}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_task_complete(cli_instance, args: argparse.Namespace) -> int:
    """Move a task to the completed status.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        task = cli_instance.lifecycle.tasks.complete_task(
            args.id, actor_id=cli_instance.actor_id
        )
        print(f"Task completed: {task.id}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_task_stats(cli_instance, args: argparse.Namespace) -> int:
    """Print the task count per status.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        counts = cli_instance.lifecycle.tasks.status_counts()
        if args.json:
            print(json.dumps(counts, indent=2))
        else:
            for name, count in counts.items():
                print(f"  {name}: {count}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
