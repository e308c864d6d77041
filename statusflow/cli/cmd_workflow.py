"""
flowctl workflow command implementations.

Seeds a fresh data directory from a YAML workflow file and exports the
current statuses and transitions back to YAML.
"""

import sys
import argparse
from pathlib import Path

from statusflow.core.exceptions import StatusFlowError
from statusflow.support.workflow_file import (
    apply_workflow,
    dump_workflow,
    load_workflow,
)


def cmd_init(cli_instance, args: argparse.Namespace) -> int:
    """Initialise the data directory, optionally seeding it from a workflow file.

    Args:
        cli_instance: FlowCLI instance with store and lifecycle
        args: Parsed command-line arguments with: workflow (optional)

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        if args.workflow:
            definition = load_workflow(args.workflow)
            statuses, transitions = apply_workflow(
                definition,
                cli_instance.lifecycle.registry,
                cli_instance.lifecycle.graph,
                actor_id=cli_instance.actor_id,
            )
            print(f"Seeded {statuses} statuses and {transitions} transitions")
        print(f"Data directory ready: {cli_instance.store.data_dir}")
        return 0

    except StatusFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_workflow_export(cli_instance, args: argparse.Namespace) -> int:
    """Write the current workflow as YAML to a file or stdout.

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        content = dump_workflow(cli_instance.lifecycle.registry, cli_instance.lifecycle.graph)
        if args.output:
            Path(args.output).write_text(content, encoding="utf-8")
            print(f"Workflow written: {args.output}")
        else:
            print(content, end="")
        return 0

    except (StatusFlowError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
