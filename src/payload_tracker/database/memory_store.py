from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Optional


class MemoryStore:
    """Process-local table store, used when no MySQL server is configured.

    Rows are kept in their persisted (column-named) shape so both backends go
    through the same schema map. Nothing survives a restart. Tables are
    mutated in place under one lock, so inserts from the record-create pool
    never race a delete.
    """

    def __init__(self, tables=("users", "work_records")):
        self._tables: Dict[str, List[Dict[str, Any]]] = {name: [] for name in tables}
        self._lock = threading.Lock()

    def _table(self, table: str) -> List[Dict[str, Any]]:
        try:
            return self._tables[table]
        except KeyError:
            raise KeyError(f"Unknown table: {table}") from None

    @staticmethod
    def _matches(row: Dict[str, Any], filters: Dict[str, Any]) -> bool:
        return all(row.get(col) == val for col, val in filters.items())

    def insert(self, table: str, row: Dict[str, Any]) -> None:
        with self._lock:
            self._table(table).append(copy.deepcopy(row))

    def select(self, table: str, **filters: Any) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._table(table) if self._matches(row, filters)]

    def select_one(self, table: str, **filters: Any) -> Optional[Dict[str, Any]]:
        rows = self.select(table, **filters)
        return rows[0] if rows else None

    def delete(self, table: str, **filters: Any) -> int:
        with self._lock:
            rows = self._table(table)
            before = len(rows)
            rows[:] = [r for r in rows if not self._matches(r, filters)]
            return before - len(rows)
