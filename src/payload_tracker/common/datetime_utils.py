from __future__ import annotations

import time
from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_iso_date(value) -> date:
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise ValidationError("Selecione uma data")
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError("Data inválida")


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def now_millis() -> int:
    """Current instant in epoch milliseconds.

    Note: Wrapped so tests can inject a fixed clock.
    """
    return int(time.time() * 1000)


def today() -> date:
    return date.today()
