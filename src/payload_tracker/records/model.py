from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..core.enums import RecordMode, RecordType


@dataclass(frozen=True)
class RecordDraft:
    """A record as submitted, before it gets an id, a value and a timestamp."""

    user_id: str
    work_date: date
    mode: RecordMode
    record_type: RecordType
    quantity: int
    route_names: Optional[str] = None
    is_two_ids: bool = False
    photos: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WorkRecord:
    """Domain entity: one priced unit of delivery work.

    ``value`` is always derived from mode/type/quantity/is_two_ids by the pay
    calculator; records are never edited after creation.
    """

    record_id: str
    user_id: str
    work_date: date
    mode: RecordMode
    record_type: RecordType
    quantity: int
    value: float
    route_names: Optional[str] = None
    is_two_ids: bool = False
    photos: Tuple[str, ...] = field(default_factory=tuple)
    timestamp: int = 0

    @property
    def month_key(self) -> str:
        return self.work_date.strftime("%Y-%m")
