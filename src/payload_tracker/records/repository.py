from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkRecord


class RecordRepository(Protocol):
    def insert(self, record: WorkRecord) -> None:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[WorkRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[WorkRecord]:
        """All records of a user in insertion order."""

        raise NotImplementedError

    def delete_by_id(self, record_id: str) -> bool:
        raise NotImplementedError
