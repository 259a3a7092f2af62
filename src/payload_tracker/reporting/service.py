from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..records.service import RecordService
from ..users.service import UserService
from .csv_export import csv_filename_for_month, generate_csv, global_export_filename
from .monthly import DashboardSummary, MonthlyGroup, group_by_month, monthly_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    row_count: int


class ReportService:
    def __init__(self, users: UserService, records: RecordService):
        self._users = users
        self._records = records

    def history(self, user_id: str) -> list[MonthlyGroup]:
        return group_by_month(self._records.get_user_records(user_id))

    def dashboard(self, user_id: str, *, today: date) -> DashboardSummary:
        return monthly_summary(self._records.get_user_records(user_id), today)

    def month_export(self, *, user_id: str, username: str, month_key: str) -> CsvExport:
        month_key = require_non_empty(month_key, "Mês inválido")
        group = next((g for g in self.history(user_id) if g.month_key == month_key), None)
        if group is None:
            raise ValidationError("Nenhum registro neste mês")
        return CsvExport(
            filename=csv_filename_for_month(username, month_key),
            content=generate_csv(group.records),
            row_count=len(group.records),
        )

    def global_export(self, *, today: date) -> CsvExport:
        """Every driver's records, driver by driver."""
        records = []
        for driver in self._users.get_all_drivers():
            records.extend(self._records.get_user_records(driver.user_id))
        logger.info("Global export with %d record(s)", len(records))
        return CsvExport(
            filename=global_export_filename(today),
            content=generate_csv(records),
            row_count=len(records),
        )
