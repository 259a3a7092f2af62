from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .database.memory_store import MemoryStore
from .payroll.calculator.standard_calculator import StandardPayCalculator
from .payroll.service import EntryService
from .photos.service import PhotoService
from .records.memory_record_repository import InMemoryRecordRepository
from .records.mysql_record_repository import MySQLRecordRepository
from .records.repository import RecordRepository
from .records.service import RecordService
from .reporting.service import ReportService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    records_repo: RecordRepository

    calculator: StandardPayCalculator
    auth_service: AuthService
    user_service: UserService
    record_service: RecordService
    entry_service: EntryService
    report_service: ReportService
    photo_service: PhotoService


def build_container(*, backend: str, db_config: Optional[dict] = None, max_photo_bytes: Optional[int] = None) -> Container:
    conn: Optional[DatabaseConnection] = None
    if backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_dict(db_config or {}))
        users_repo: UserRepository = MySQLUserRepository(conn)
        records_repo: RecordRepository = MySQLRecordRepository(conn)
    elif backend == "memory":
        store = MemoryStore()
        users_repo = InMemoryUserRepository(store)
        records_repo = InMemoryRecordRepository(store)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")

    calculator = StandardPayCalculator()
    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    record_service = RecordService(records_repo, calculator=calculator)
    entry_service = EntryService(record_service, calculator=calculator)
    report_service = ReportService(user_service, record_service)
    photo_service = PhotoService(max_bytes=max_photo_bytes) if max_photo_bytes else PhotoService()

    return Container(
        conn=conn,
        users_repo=users_repo,
        records_repo=records_repo,
        calculator=calculator,
        auth_service=auth_service,
        user_service=user_service,
        record_service=record_service,
        entry_service=entry_service,
        report_service=report_service,
        photo_service=photo_service,
    )
