from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "ADMIN"
    DRIVER = "DRIVER"


class RecordMode(str, Enum):
    """How a work record is paid: per item or per route-day."""

    INDIVIDUAL = "INDIVIDUAL"
    DAILY = "DAILY"


class RecordType(str, Enum):
    PARCEL = "PARCEL"
    COLLECTION = "COLLECTION"
    DAILY_FLAT = "DAILY_FLAT"
