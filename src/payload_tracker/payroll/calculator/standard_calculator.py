from __future__ import annotations

from dataclasses import dataclass

from .base import IndividualPay, PayCalculator


@dataclass(frozen=True)
class RateTable:
    """GBP rates. Two-ID tiers: below ``two_id_lower``, up to ``two_id_upper`` inclusive, above."""

    parcel: float = 1.00
    collection: float = 0.80
    single_id_day: float = 180.00
    two_id_low: float = 260.00
    two_id_mid: float = 300.00
    two_id_high: float = 360.00
    two_id_lower: int = 150
    two_id_upper: int = 250


DEFAULT_RATES = RateTable()


class StandardPayCalculator(PayCalculator):
    """Standard rule: per-item rates in individual mode, flat or tiered day rate in daily mode."""

    def __init__(self, rates: RateTable = DEFAULT_RATES):
        self.rates = rates

    def calculate_individual(self, parcels: int, collections: int) -> IndividualPay:
        parcel_value = parcels * self.rates.parcel
        collection_value = collections * self.rates.collection
        return IndividualPay(
            parcel_value=parcel_value,
            collection_value=collection_value,
            total=parcel_value + collection_value,
        )

    def calculate_daily(self, is_two_ids: bool, quantity: int) -> float:
        if not is_two_ids:
            return self.rates.single_id_day
        if quantity < self.rates.two_id_lower:
            return self.rates.two_id_low
        if quantity <= self.rates.two_id_upper:
            return self.rates.two_id_mid
        return self.rates.two_id_high


_default = StandardPayCalculator()


def calculate_individual(parcels: int, collections: int) -> IndividualPay:
    return _default.calculate_individual(parcels, collections)


def calculate_daily(is_two_ids: bool, quantity: int) -> float:
    return _default.calculate_daily(is_two_ids, quantity)
