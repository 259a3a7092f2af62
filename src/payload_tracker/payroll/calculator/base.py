from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import RecordMode, RecordType
from ...core.exceptions import ValidationError


@dataclass(frozen=True)
class IndividualPay:
    parcel_value: float
    collection_value: float
    total: float


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for pay rules)."""

    @abstractmethod
    def calculate_individual(self, parcels: int, collections: int) -> IndividualPay:
        raise NotImplementedError

    @abstractmethod
    def calculate_daily(self, is_two_ids: bool, quantity: int) -> float:
        raise NotImplementedError

    def record_value(self, mode: RecordMode, record_type: RecordType, quantity: int, is_two_ids: bool = False) -> float:
        """Stored value of a record, derived only from its own fields."""
        if mode == RecordMode.INDIVIDUAL:
            if record_type == RecordType.PARCEL:
                return self.calculate_individual(quantity, 0).parcel_value
            if record_type == RecordType.COLLECTION:
                return self.calculate_individual(0, quantity).collection_value
        elif mode == RecordMode.DAILY and record_type == RecordType.DAILY_FLAT:
            return self.calculate_daily(bool(is_two_ids), quantity)

        raise ValidationError(f"Tipo {record_type.value} não combina com o modo {mode.value}")
