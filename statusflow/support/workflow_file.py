"""
Workflow file utilities: YAML definitions of statuses and transitions.

A workflow file seeds an empty store or exports the current lifecycle:

    statuses:
      - name: New
        is_default: true
      - name: In Progress
        color: "#2563eb"
      - name: Completed
        can_delete: false
    transitions:
      - from: New
        to: In Progress
      - from: In Progress
        to: Completed
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from statusflow.core.exceptions import WorkflowFileError
from statusflow.lifecycle.graph import TransitionGraph
from statusflow.lifecycle.registry import StatusRegistry


STATUS_KEYS = {"name", "description", "color", "is_default", "can_delete"}


@dataclass
class WorkflowDefinition:
    """Parsed workflow file: statuses in listed order plus directed edges."""

    statuses: List[Dict[str, Any]] = field(default_factory=list)
    transitions: List[Tuple[str, str]] = field(default_factory=list)


def parse_workflow(content: str) -> WorkflowDefinition:
    """Parse a YAML workflow document.

    Args:
        content: YAML text.

    Returns:
        WorkflowDefinition.

    Raises:
        WorkflowFileError: If YAML is invalid or the structure is wrong.
    """
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise WorkflowFileError(f"Invalid YAML in workflow file: {e}")

    if not isinstance(data, dict):
        raise WorkflowFileError("Workflow file must be a YAML dictionary.")

    raw_statuses = data.get("statuses") or []
    raw_transitions = data.get("transitions") or []
    if not isinstance(raw_statuses, list) or not isinstance(raw_transitions, list):
        raise WorkflowFileError("'statuses' and 'transitions' must be lists.")

    definition = WorkflowDefinition()
    for idx, entry in enumerate(raw_statuses):
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise WorkflowFileError(f"Status #{idx + 1} needs a name.")
        unknown = set(entry) - STATUS_KEYS
        if unknown:
            raise WorkflowFileError(
                f"Status '{entry['name']}' has unknown keys: {', '.join(sorted(unknown))}"
            )
        definition.statuses.append(dict(entry))

    defaults = [s["name"] for s in definition.statuses if s.get("is_default")]
    if len(defaults) > 1:
        raise WorkflowFileError(f"Only one default status allowed, got: {', '.join(defaults)}")

    for idx, entry in enumerate(raw_transitions):
        if not isinstance(entry, dict) or "from" not in entry or "to" not in entry:
            raise WorkflowFileError(f"Transition #{idx + 1} needs 'from' and 'to'.")
        definition.transitions.append((str(entry["from"]), str(entry["to"])))

    return definition


def load_workflow(path: str) -> WorkflowDefinition:
    """Read and parse a workflow file.

    Raises:
        WorkflowFileError: If the file is missing, unreadable or invalid.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise WorkflowFileError(f"Workflow file not found: {file_path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except IOError as e:
        raise WorkflowFileError(f"Failed to read workflow file: {e}")

    return parse_workflow(content)


def apply_workflow(
    definition: WorkflowDefinition,
    registry: StatusRegistry,
    graph: TransitionGraph,
    actor_id: Optional[str] = None,
) -> Tuple[int, int]:
    """Seed an empty store from a workflow definition in one transaction.

    Statuses are numbered in listed order, then edges are added.

    Returns:
        Tuple of (statuses_created, transitions_created).

    Raises:
        WorkflowFileError: If the store already holds statuses.
        ValidationError: For bad names or edges (nothing is committed).
    """
    with registry.store.transaction():
        if registry.list_statuses():
            raise WorkflowFileError("Store already has statuses; refusing to seed.")

        for entry in definition.statuses:
            registry.create(
                entry["name"],
                color=entry.get("color"),
                description=entry.get("description"),
                is_default=bool(entry.get("is_default", False)),
                can_delete=bool(entry.get("can_delete", True)),
                actor_id=actor_id,
            )
        for from_status, to_status in definition.transitions:
            graph.add_edge(from_status, to_status, actor_id=actor_id)

    return len(definition.statuses), len(definition.transitions)


def dump_workflow(registry: StatusRegistry, graph: TransitionGraph) -> str:
    """Serialize the current statuses and transitions as a YAML workflow document."""
    statuses = []
    for status in registry.list_statuses():
        entry: Dict[str, Any] = {"name": status.name, "color": status.color}
        if status.description:
            entry["description"] = status.description
        if status.is_default:
            entry["is_default"] = True
        if not status.can_delete:
            entry["can_delete"] = False
        statuses.append(entry)

    transitions = [
        {"from": t.from_status, "to": t.to_status} for t in graph.list_transitions()
    ]

    return yaml.dump(
        {"statuses": statuses, "transitions": transitions},
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
