"""
flowctl status command implementations.

Handles status definitions: list, create, update, reorder, default.
"""

import sys
import json
import argparse
import logging

from statusflow.core.exceptions import StatusFlowError


logger = logging.getLogger(__name__)


def _print_status_table(statuses) -> None:
    for status in statuses:
        flags = []
        if status.is_default:
            flags.append("default")
        if not status.can_delete:
            flags.append("protected")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        print(f"  {status.sequence_order:>3}. {status.name} ({status.color}){suffix}  {status.id}")


def cmd_status_list(cli_instance, args: argparse.Namespace) -> int:
    """List statuses in workflow order.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: json (optional)

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        statuses = cli_instance.lifecycle.registry.list_statuses()
        if args.json:
            print(json.dumps([s.to_dict() for s in statuses], indent=2, default=str))
        elif not statuses:
            print("No statuses defined.")
        else:
            _print_status_table(statuses)
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status_create(cli_instance, args: argparse.Namespace) -> int:
    """Create a status.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: name, color, description,
            sequence_order, default, protected

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        status = cli_instance.lifecycle.registry.create(
            args.name,
            color=args.color,
            description=args.description,
            sequence_order=args.sequence_order,
            is_default=args.default,
            can_delete=not args.protected,
            actor_id=cli_instance.actor_id,
        )
        print(f"Status created: {status.name} ({status.id})")
        return 0

    except StatusFlowError as e:
        logger.warning(f"Status create refused: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status_update(cli_instance, args: argparse.Namespace) -> int:
    """Update fields of a status.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: status, name, color,
            description, sequence_order

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        status = cli_instance.resolve_status(args.status)
        patch = {}
        if args.name is not None:
            patch["name"] = args.name
        if args.color is not None:
            patch["color"] = args.color
        if args.description is not None:
            patch["description"] = args.description
        if args.sequence_order is not None:
            patch["sequence_order"] = args.sequence_order

        if not patch:
            print("Error: Nothing to update", file=sys.stderr)
            return 1

        updated = cli_instance.lifecycle.registry.update(
            status.id, patch, actor_id=cli_instance.actor_id
        )
        print(f"Status updated: {updated.name}")
        return 0

    except StatusFlowError as e:
        logger.warning(f"Status update refused: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status_reorder(cli_instance, args: argparse.Namespace) -> int:
    """Renumber statuses in the given order (every status, by id or name).

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        ids = [cli_instance.resolve_status(ref).id for ref in args.statuses]
        statuses = cli_instance.lifecycle.registry.reorder(
            ids, actor_id=cli_instance.actor_id
        )
        _print_status_table(statuses)
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status_default(cli_instance, args: argparse.Namespace) -> int:
    """Mark a status as the default.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        status = cli_instance.resolve_status(args.status)
        cli_instance.lifecycle.registry.set_default(
            status.id, actor_id=cli_instance.actor_id
        )
        print(f"Default status: {status.name}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
