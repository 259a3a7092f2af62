from __future__ import annotations

from datetime import date
from itertools import count

import pytest

from payload_tracker.core.enums import RecordMode, RecordType
from payload_tracker.core.exceptions import StorageError
from payload_tracker.database.memory_store import MemoryStore
from payload_tracker.records.memory_record_repository import InMemoryRecordRepository
from payload_tracker.records.model import RecordDraft
from payload_tracker.records.service import RecordService


class BrokenRecords:
    def insert(self, record):
        raise StorageError("connection refused")

    def list_for_user(self, user_id):
        raise StorageError("connection refused")


def _service():
    ids = count(1)
    clock = count(1000)
    repo = InMemoryRecordRepository(MemoryStore())
    svc = RecordService(repo, id_factory=lambda: f"rec-{next(ids)}", clock=lambda: next(clock))
    return repo, svc


def _draft(day: date, *, user_id="u1", record_type=RecordType.PARCEL, quantity=3):
    mode = RecordMode.DAILY if record_type == RecordType.DAILY_FLAT else RecordMode.INDIVIDUAL
    return RecordDraft(user_id=user_id, work_date=day, mode=mode, record_type=record_type, quantity=quantity)


def test_create_record_assigns_id_timestamp_and_value():
    repo, svc = _service()
    record = svc.create_record(_draft(date(2024, 3, 5), record_type=RecordType.COLLECTION, quantity=5))

    assert record.record_id == "rec-1"
    assert record.timestamp == 1000
    assert record.value == pytest.approx(4.00)
    assert repo.get_by_id("rec-1") == record


def test_user_records_newest_date_first_and_scoped_to_owner():
    _, svc = _service()
    svc.create_record(_draft(date(2024, 3, 5)))
    svc.create_record(_draft(date(2024, 4, 1)))
    svc.create_record(_draft(date(2024, 3, 20)))
    svc.create_record(_draft(date(2024, 5, 1), user_id="someone-else"))

    days = [r.work_date for r in svc.get_user_records("u1")]

    assert days == [date(2024, 4, 1), date(2024, 3, 20), date(2024, 3, 5)]


def test_same_day_records_keep_insertion_order():
    _, svc = _service()
    svc.create_record(_draft(date(2024, 3, 5), record_type=RecordType.PARCEL))
    svc.create_record(_draft(date(2024, 3, 5), record_type=RecordType.COLLECTION))

    types = [r.record_type for r in svc.get_user_records("u1")]

    assert types == [RecordType.PARCEL, RecordType.COLLECTION]


def test_delete_record_removes_exactly_one():
    _, svc = _service()
    keep = svc.create_record(_draft(date(2024, 3, 5)))
    gone = svc.create_record(_draft(date(2024, 3, 6)))

    svc.delete_record(gone.record_id)

    assert svc.get_user_records("u1") == [keep]


def test_delete_missing_record_is_a_no_op():
    _, svc = _service()
    svc.create_record(_draft(date(2024, 3, 5)))
    before = svc.get_user_records("u1")

    svc.delete_record("does-not-exist")

    assert svc.get_user_records("u1") == before


def test_reads_degrade_but_writes_raise_on_store_failure():
    svc = RecordService(BrokenRecords())

    assert svc.get_user_records("u1") == []
    with pytest.raises(StorageError):
        svc.create_record(_draft(date(2024, 3, 5)))
