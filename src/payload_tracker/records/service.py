from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import now_millis
from ..common.ids import new_id
from ..core.exceptions import StorageError
from ..payroll.calculator.base import PayCalculator
from ..payroll.calculator.standard_calculator import StandardPayCalculator
from .model import RecordDraft, WorkRecord
from .repository import RecordRepository

logger = logging.getLogger(__name__)


class RecordService:
    """Record lifecycle: create, list, delete. Records are never updated."""

    def __init__(
        self,
        records: RecordRepository,
        *,
        calculator: Optional[PayCalculator] = None,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], int] = now_millis,
    ):
        self._records = records
        self._calculator = calculator or StandardPayCalculator()
        self._new_id = id_factory
        self._clock = clock

    def create_record(self, draft: RecordDraft) -> WorkRecord:
        """Price and persist a draft. Store failures propagate as ``StorageError``."""
        value = self._calculator.record_value(draft.mode, draft.record_type, draft.quantity, draft.is_two_ids)
        record = WorkRecord(
            record_id=self._new_id(),
            user_id=draft.user_id,
            work_date=draft.work_date,
            mode=draft.mode,
            record_type=draft.record_type,
            quantity=draft.quantity,
            value=value,
            route_names=draft.route_names,
            is_two_ids=draft.is_two_ids,
            photos=tuple(draft.photos),
            timestamp=self._clock(),
        )
        self._records.insert(record)
        logger.info(
            "Created %s/%s record %s for user %s (%.2f)",
            record.mode.value,
            record.record_type.value,
            record.record_id,
            record.user_id,
            record.value,
        )
        return record

    def get_user_records(self, user_id: str) -> list[WorkRecord]:
        """Newest work date first; same-day records keep insertion order."""
        try:
            rows = list(self._records.list_for_user(user_id))
        except StorageError:
            logger.exception("Could not load records for user %s", user_id)
            return []
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def get_record(self, record_id: str) -> Optional[WorkRecord]:
        return self._records.get_by_id(record_id)

    def delete_record(self, record_id: str) -> None:
        """Remove one record; absent ids are ignored. Callers scope ownership."""
        if self._records.delete_by_id(record_id):
            logger.info("Deleted record %s", record_id)
