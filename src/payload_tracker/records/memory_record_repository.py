from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import MemoryStore
from ..database.schema_map import WORK_RECORDS, model_attrs
from .model import WorkRecord
from .repository import RecordRepository


class InMemoryRecordRepository(RecordRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def insert(self, record: WorkRecord) -> None:
        self._store.insert(WORK_RECORDS.table, WORK_RECORDS.to_row(model_attrs(record)))

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        row = self._store.select_one(WORK_RECORDS.table, id=record_id)
        return WorkRecord(**WORK_RECORDS.from_row(row)) if row else None

    def list_for_user(self, user_id: str) -> Sequence[WorkRecord]:
        rows = self._store.select(WORK_RECORDS.table, user_id=user_id)
        return [WorkRecord(**WORK_RECORDS.from_row(r)) for r in rows]

    def delete_by_id(self, record_id: str) -> bool:
        return self._store.delete(WORK_RECORDS.table, id=record_id) > 0
