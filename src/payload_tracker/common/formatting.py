"""Display helpers shared by the HTTP layer and the reports."""

from __future__ import annotations

from datetime import date

from ..core.constants import CURRENCY_SYMBOL
from .datetime_utils import parse_iso_date

PT_BR_MONTHS = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def format_date(value) -> str:
    """Day/month/year as written in pt-BR, e.g. ``05/03/2024``."""
    if not isinstance(value, date):
        value = parse_iso_date(str(value))
    return value.strftime("%d/%m/%Y")


def format_currency(value: float) -> str:
    """Two-decimal GBP amount with thousands separator, e.g. ``£1,234.50``."""
    amount = float(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def month_label(key: str) -> str:
    """``2024-03`` -> ``Março de 2024``."""
    year, month = key.split("-")
    name = PT_BR_MONTHS[int(month) - 1]
    return f"{name.capitalize()} de {year}"
