from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable

from ..core.constants import CSV_FILENAME_PREFIX
from ..records.model import WorkRecord

CSV_HEADER = ("Data", "Tipo", "Modo", "Qtd", "Valor", "Rotas", "ID")


def csv_row(r: WorkRecord) -> list[str]:
    return [
        r.work_date.isoformat(),
        r.record_type.value,
        r.mode.value,
        str(r.quantity),
        f"{r.value:.2f}",
        r.route_names or "-",
        r.record_id,
    ]


def generate_csv(records: Iterable[WorkRecord]) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in records:
        writer.writerow(csv_row(r))
    return out.getvalue()


def csv_filename_for_month(username: str, key: str) -> str:
    return f"{CSV_FILENAME_PREFIX}_{username}_{key}.csv"


def global_export_filename(today: date) -> str:
    return f"{CSV_FILENAME_PREFIX}_GLOBAL_EXPORT_{today.isoformat()}.csv"
