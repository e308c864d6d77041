"""
In-memory lifecycle store with the same transaction semantics as the JSONL store.
"""

import copy
from typing import Any, Dict, List

from statusflow.store.base import TableStore, TABLE_ORDER


class MemoryStore(TableStore):
    """Process-local store; committed state lives in a dict of row lists."""

    def __init__(self):
        super().__init__()
        self._tables: Dict[str, List[Any]] = {name: [] for name in TABLE_ORDER}

    def _load_table(self, name: str) -> List[Any]:
        # Rows are copied so staged edits never leak into committed state
        return [copy.copy(row) for row in self._tables[name]]

    def _commit_tables(self, tables: Dict[str, List[Any]]) -> None:
        for name, rows in tables.items():
            self._tables[name] = [copy.copy(row) for row in rows]
