from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..common.datetime_utils import month_key
from ..common.formatting import month_label
from ..records.model import WorkRecord


@dataclass
class MonthlyGroup:
    month_key: str
    label: str
    total: float = 0.0
    records: list[WorkRecord] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSummary:
    month_key: str
    total_earnings: float
    days_worked: int
    daily_average: float


def group_by_month(records: Iterable[WorkRecord]) -> list[MonthlyGroup]:
    """Partition records by YYYY-MM, most recent month first.

    Records keep their incoming order inside each group.
    """
    groups: dict[str, MonthlyGroup] = {}
    for r in records:
        key = r.month_key
        g = groups.get(key)
        if not g:
            g = MonthlyGroup(month_key=key, label=month_label(key))
            groups[key] = g
        g.records.append(r)
        g.total += r.value

    return sorted(groups.values(), key=lambda g: g.month_key, reverse=True)


def monthly_summary(records: Iterable[WorkRecord], today: date) -> DashboardSummary:
    """Earnings of the current month and the average per distinct worked day."""
    key = month_key(today)
    month_records = [r for r in records if r.month_key == key]
    total = sum(r.value for r in month_records)
    days = len({r.work_date for r in month_records})
    return DashboardSummary(
        month_key=key,
        total_earnings=total,
        days_worked=days,
        daily_average=total / days if days else 0.0,
    )
