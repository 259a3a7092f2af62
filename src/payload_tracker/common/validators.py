from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank form fields are stored as missing, not as empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_quantity(value, field_name: str) -> int:
    """Parse a non-negative integer quantity; blank counts as zero."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    try:
        qty = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} inválido")
    if qty < 0:
        raise ValidationError(f"{field_name} não pode ser negativo")
    return qty


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "on", "yes", "sim"}
