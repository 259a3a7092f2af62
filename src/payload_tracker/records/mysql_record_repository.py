from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.schema_map import WORK_RECORDS, model_attrs
from .model import WorkRecord
from .repository import RecordRepository


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, record: WorkRecord) -> None:
        row = WORK_RECORDS.to_row(model_attrs(record))
        columns = ", ".join(f"`{c}`" for c in row)
        placeholders = ", ".join(["%s"] * len(row))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO work_records({columns}) VALUES({placeholders})",
                tuple(row.values()),
            )

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {WORK_RECORDS.select_list()} FROM work_records WHERE id=%s",
                (record_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return WorkRecord(**WORK_RECORDS.from_row(row))

    def list_for_user(self, user_id: str) -> Sequence[WorkRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {WORK_RECORDS.select_list()}
                FROM work_records
                WHERE user_id=%s
                ORDER BY `timestamp`, id
                """,
                (user_id,),
            )
            return [WorkRecord(**WORK_RECORDS.from_row(r)) for r in fetchall(cur)]

    def delete_by_id(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_records WHERE id=%s", (record_id,))
            return cur.rowcount > 0
