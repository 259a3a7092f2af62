"""Field mapping between domain models, persisted rows and JSON payloads.

Each entity has exactly one table here. A row uses the store's snake_case
column names, the domain dataclasses use their own attribute names, and the
HTTP layer speaks camelCase. Every translation goes through these tables.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple

from ..core.enums import RecordMode, RecordType, Role
from ..core.exceptions import StorageError


def _identity(value: Any) -> Any:
    return value


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _as_int(value: Any) -> int:
    return int(value)


def _as_float(value: Any) -> float:
    # DECIMAL columns come back as Decimal from mysql-connector.
    return float(value)


def _as_bool(value: Any) -> bool:
    return bool(int(value)) if isinstance(value, (int, str, Decimal)) else bool(value)


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()


def _optional(convert: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def wrapper(value: Any) -> Any:
        return None if value is None else convert(value)

    return wrapper


def _photos_to_column(value: Any) -> str:
    return json.dumps(list(value or []))


def _photos_from_column(value: Any) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return tuple(json.loads(value))


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True)
class FieldMapping:
    attr: str
    column: str
    json_key: str
    to_column: Callable[[Any], Any] = _identity
    from_column: Callable[[Any], Any] = _identity


class SchemaMap:
    """Bidirectional attr <-> column <-> JSON key table for one entity."""

    def __init__(self, table: str, fields: Sequence[FieldMapping]):
        self.table = table
        self.fields = tuple(fields)
        self._by_attr = {f.attr: f for f in self.fields}
        self._by_column = {f.column: f for f in self.fields}
        self._by_json = {f.json_key: f for f in self.fields}
        if not (len(self._by_attr) == len(self._by_column) == len(self._by_json) == len(self.fields)):
            raise ValueError(f"Duplicate field name in schema map for {table}")

    def columns(self) -> Tuple[str, ...]:
        return tuple(f.column for f in self.fields)

    def column_for(self, attr: str) -> str:
        return self._by_attr[attr].column

    def attr_for(self, column: str) -> str:
        return self._by_column[column].attr

    def select_list(self) -> str:
        return ", ".join(f"`{c}`" for c in self.columns())

    def to_row(self, attrs: Mapping[str, Any]) -> Dict[str, Any]:
        return {f.column: f.to_column(attrs[f.attr]) for f in self.fields if f.attr in attrs}

    def from_row(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            return {f.attr: f.from_column(row[f.column]) for f in self.fields if f.column in row}
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Malformed {self.table} row: {exc}") from exc

    def to_json(self, attrs: Mapping[str, Any], *, exclude: Sequence[str] = ()) -> Dict[str, Any]:
        return {
            f.json_key: _jsonable(attrs[f.attr])
            for f in self.fields
            if f.attr in attrs and f.attr not in exclude
        }

    def from_json(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {self._by_json[k].attr: v for k, v in payload.items() if k in self._by_json}


USERS = SchemaMap(
    "users",
    (
        FieldMapping("user_id", "id", "id"),
        FieldMapping("name", "name", "name"),
        FieldMapping("username", "username", "username"),
        FieldMapping("password_hash", "password_hash", "passwordHash"),
        FieldMapping("role", "role", "role", to_column=_enum_value, from_column=Role),
        FieldMapping("created_at", "created_at", "createdAt", from_column=_as_int),
    ),
)

WORK_RECORDS = SchemaMap(
    "work_records",
    (
        FieldMapping("record_id", "id", "id"),
        FieldMapping("user_id", "user_id", "userId"),
        FieldMapping("work_date", "date", "date", from_column=_as_date),
        FieldMapping("mode", "mode", "mode", to_column=_enum_value, from_column=RecordMode),
        FieldMapping("record_type", "type", "type", to_column=_enum_value, from_column=RecordType),
        FieldMapping("quantity", "quantity", "quantity", from_column=_as_int),
        FieldMapping("value", "value", "value", from_column=_as_float),
        FieldMapping("route_names", "route_names", "routeNames"),
        FieldMapping("is_two_ids", "is_two_ids", "isTwoIDs", to_column=_as_int, from_column=_optional(_as_bool)),
        FieldMapping("photos", "photos", "photos", to_column=_photos_to_column, from_column=_photos_from_column),
        FieldMapping("timestamp", "timestamp", "timestamp", from_column=_as_int),
    ),
)


def model_attrs(obj: Any) -> Dict[str, Any]:
    """Shallow attribute dict of a frozen dataclass (no deep copy of photos)."""
    return {name: getattr(obj, name) for name in obj.__dataclass_fields__}
