"""
Lifecycle store backed by JSONL files, with file locking and atomic updates.
"""

import fcntl
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from statusflow.constants import (
    STATUSES_FILE,
    TRANSITIONS_FILE,
    TASKS_FILE,
    ACTIVITY_FILE,
    LOCK_FILE,
)
from statusflow.core.exceptions import StorageError
from statusflow.store.base import TableStore, TABLE_MODELS
from statusflow.support.paths import get_data_dir


logger = logging.getLogger(__name__)

TABLE_FILES = {
    "statuses": STATUSES_FILE,
    "transitions": TRANSITIONS_FILE,
    "tasks": TASKS_FILE,
    "activity": ACTIVITY_FILE,
}


class JsonlStore(TableStore):
    """Thread-safe JSONL store with an exclusive file lock per transaction."""

    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize JSONL store.

        Args:
            data_dir: Directory holding the table files (created if missing).
                If omitted, resolved from STATUSFLOW_DATA_DIR or ./.statusflow.
        """
        super().__init__()
        self.data_dir = Path(data_dir) if data_dir else get_data_dir()
        self._file_lock_handle = None

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            for filename in TABLE_FILES.values():
                (self.data_dir / filename).touch(exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot initialise data directory {self.data_dir}: {e}") from e

    def table_path(self, name: str) -> Path:
        """Path of the JSONL file backing a table."""
        return self.data_dir / TABLE_FILES[name]

    def _acquire_backend_lock(self) -> None:
        """Acquire exclusive file lock."""
        if self._file_lock_handle is not None:
            return  # Already locked

        try:
            self._file_lock_handle = open(self.data_dir / LOCK_FILE, "a+")
            fcntl.flock(self._file_lock_handle.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            self._file_lock_handle = None
            raise StorageError(f"Cannot lock data directory {self.data_dir}: {e}") from e

    def _release_backend_lock(self) -> None:
        """Release file lock."""
        if self._file_lock_handle is not None:
            fcntl.flock(self._file_lock_handle.fileno(), fcntl.LOCK_UN)
            self._file_lock_handle.close()
            self._file_lock_handle = None

    def _load_table(self, name: str) -> List[Any]:
        """Read all rows of a table (must be called within lock context)."""
        path = self.table_path(name)
        model = TABLE_MODELS[name]
        rows = []
        if not path.exists() or path.stat().st_size == 0:
            return rows

        try:
            with open(path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        rows.append(model.from_dict(json.loads(line)))
        except (ValueError, TypeError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise StorageError(f"Error reading {path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        return rows

    def _commit_tables(self, tables: Dict[str, List[Any]]) -> None:
        """Write each changed table atomically, in the order given."""
        for name, rows in tables.items():
            self._write_table(name, rows)

    def _write_table(self, name: str, rows: List[Any]) -> None:
        path = self.table_path(name)
        # Write to temporary file first, then atomically rename
        temp_file = path.with_suffix(".jsonl.tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                for row in rows:
                    f.write(json.dumps(row.to_dict(), default=str) + "\n")
            temp_file.replace(path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Cannot write {path}: {e}") from e
        logger.debug(f"Wrote {len(rows)} rows to {path}")
