"""
Shared fixtures for the statusflow test suite.

Provides stores (in-memory and JSONL in a temporary directory) and a
lifecycle seeded with the New -> In Progress -> Completed workflow.
Category-specific fixtures live in their respective test modules.
"""

import tempfile
from pathlib import Path

import pytest

from statusflow.lifecycle import Lifecycle
from statusflow.store import JsonlStore, MemoryStore


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def temp_data_dir():
    """Create a temporary data directory for JSONL stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "data"


@pytest.fixture
def jsonl_store(temp_data_dir):
    """Create a JsonlStore in a temporary directory."""
    return JsonlStore(str(temp_data_dir))


@pytest.fixture
def lifecycle(memory_store):
    """Lifecycle over an empty in-memory store."""
    return Lifecycle(memory_store)


@pytest.fixture
def seeded(lifecycle):
    """Lifecycle with New(default), In Progress, Completed and a linear workflow."""
    registry = lifecycle.registry
    registry.create("New", sequence_order=1, is_default=True, actor_id="admin")
    registry.create("In Progress", sequence_order=2, actor_id="admin")
    registry.create("Completed", sequence_order=3, actor_id="admin")
    lifecycle.graph.add_edge("New", "In Progress", actor_id="admin")
    lifecycle.graph.add_edge("In Progress", "Completed", actor_id="admin")
    return lifecycle
