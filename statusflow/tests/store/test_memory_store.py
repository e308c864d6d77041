"""
Tests for the in-memory lifecycle store.
"""

import threading

import pytest

from statusflow.core.exceptions import ConflictError
from statusflow.core.models import Status, Task


class TestMemoryStore:
    """Test MemoryStore behaves like the JSONL store."""

    def test_rollback_on_exception(self, memory_store):
        """Test staged writes vanish when the block raises."""
        with pytest.raises(ValueError):
            with memory_store.transaction():
                memory_store.add_task(Task(id="1", title="a", status="New"))
                raise ValueError("abort")
        assert memory_store.list_tasks() == []

    def test_staged_rows_isolated_from_committed(self, memory_store):
        """Test that an in-flight update is not visible after rollback."""
        memory_store.add_task(Task(id="1", title="a", status="New"))
        with pytest.raises(ValueError):
            with memory_store.transaction():
                memory_store.update_task_status("1", "Done")
                assert memory_store.get_task("1").status == "Done"
                raise ValueError("abort")
        assert memory_store.get_task("1").status == "New"

    def test_duplicate_task_id(self, memory_store):
        memory_store.add_task(Task(id="1", title="a", status="New"))
        with pytest.raises(ConflictError):
            memory_store.add_task(Task(id="1", title="b", status="New"))

    def test_transactions_serialise_threads(self, memory_store):
        """Test that concurrent read-modify-write transactions do not lose updates."""
        memory_store.add_status(Status(id="s", name="Counter", sequence_order=0))

        def bump():
            for _ in range(50):
                with memory_store.transaction():
                    status = memory_store.get_status("s")
                    status.sequence_order += 1
                    memory_store.update_status(status)

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert memory_store.get_status("s").sequence_order == 200
