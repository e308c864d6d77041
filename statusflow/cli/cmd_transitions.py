"""
flowctl transition command implementations.

Handles lifecycle edges: list, add, remove, check, next, sequence.
"""

import sys
import json
import argparse

from statusflow.core.exceptions import StatusFlowError


def cmd_transition_list(cli_instance, args: argparse.Namespace) -> int:
    """List transitions in insertion order.

    Args:
        cli_instance: FlowCLI instance with lifecycle
        args: Parsed command-line arguments with: json (optional)

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        transitions = cli_instance.lifecycle.graph.list_transitions()
        if args.json:
            print(json.dumps([t.to_dict() for t in transitions], indent=2, default=str))
        elif not transitions:
            print("No transitions defined.")
        else:
            for t in transitions:
                print(f"  {t.from_status} -> {t.to_status}  {t.id}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_transition_add(cli_instance, args: argparse.Namespace) -> int:
    """Add a transition between two status names.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        transition = cli_instance.lifecycle.graph.add_edge(
            args.from_status, args.to_status, actor_id=cli_instance.actor_id
        )
        print(f"Transition added: {transition.from_status} -> {transition.to_status}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_transition_remove(cli_instance, args: argparse.Namespace) -> int:
    """Remove a transition by id.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        transition = cli_instance.lifecycle.graph.remove_edge(
            args.id, actor_id=cli_instance.actor_id
        )
        print(f"Transition removed: {transition.from_status} -> {transition.to_status}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_transition_check(cli_instance, args: argparse.Namespace) -> int:
    """Report whether a move between two statuses is allowed.

    Exit code 0 when allowed, 1 when denied.
    """
    validator = cli_instance.lifecycle.validator
    try:
        if validator.is_transition_allowed(args.from_status, args.to_status):
            print(f"Allowed: {args.from_status} -> {args.to_status}")
            return 0

        allowed = validator.get_allowed_next_statuses(args.from_status)
        print(
            f"Denied: {args.from_status} -> {args.to_status}. "
            f"Allowed next statuses: {', '.join(allowed) if allowed else 'none'}"
        )
        return 1

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_transition_next(cli_instance, args: argparse.Namespace) -> int:
    """Print the statuses reachable in one step from a status."""
    try:
        allowed = cli_instance.lifecycle.validator.get_allowed_next_statuses(args.status)
        if args.json:
            print(json.dumps(allowed))
        else:
            for name in allowed:
                print(name)
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_transition_sequence(cli_instance, args: argparse.Namespace) -> int:
    """Print the forward workflow sequence derived from the transitions."""
    try:
        sequence = cli_instance.lifecycle.graph.status_sequence()
        print(" -> ".join(sequence) if sequence else "No transitions defined.")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
