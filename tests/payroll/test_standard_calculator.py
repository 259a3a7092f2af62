import pytest

from payload_tracker.core.enums import RecordMode, RecordType
from payload_tracker.core.exceptions import ValidationError
from payload_tracker.payroll.calculator.standard_calculator import (
    RateTable,
    StandardPayCalculator,
    calculate_daily,
    calculate_individual,
)


@pytest.mark.parametrize("parcels,collections", [(0, 0), (1, 0), (0, 1), (12, 7), (250, 131)])
def test_individual_total_is_parcels_plus_collections(parcels, collections):
    pay = calculate_individual(parcels, collections)

    assert pay.parcel_value == pytest.approx(parcels * 1.00)
    assert pay.collection_value == pytest.approx(collections * 0.80)
    assert pay.total == pytest.approx(parcels * 1.00 + collections * 0.80)


@pytest.mark.parametrize("quantity", [0, 1, 149, 150, 250, 251, 10_000])
def test_daily_single_id_is_flat(quantity):
    assert calculate_daily(False, quantity) == 180.00


@pytest.mark.parametrize(
    "quantity,expected",
    [
        (0, 260.00),
        (149, 260.00),
        (150, 300.00),
        (200, 300.00),
        (250, 300.00),
        (251, 360.00),
        (400, 360.00),
    ],
)
def test_daily_two_ids_tiers_include_both_middle_bounds(quantity, expected):
    assert calculate_daily(True, quantity) == expected


def test_record_value_matches_each_mode():
    calc = StandardPayCalculator()

    assert calc.record_value(RecordMode.INDIVIDUAL, RecordType.PARCEL, 3) == pytest.approx(3.00)
    assert calc.record_value(RecordMode.INDIVIDUAL, RecordType.COLLECTION, 5) == pytest.approx(4.00)
    assert calc.record_value(RecordMode.DAILY, RecordType.DAILY_FLAT, 1, False) == 180.00
    assert calc.record_value(RecordMode.DAILY, RecordType.DAILY_FLAT, 180, True) == 300.00


def test_record_value_rejects_mismatched_type():
    calc = StandardPayCalculator()
    with pytest.raises(ValidationError):
        calc.record_value(RecordMode.INDIVIDUAL, RecordType.DAILY_FLAT, 1)
    with pytest.raises(ValidationError):
        calc.record_value(RecordMode.DAILY, RecordType.PARCEL, 1)


def test_custom_rate_table():
    calc = StandardPayCalculator(RateTable(parcel=1.10, two_id_lower=100))

    assert calc.calculate_individual(10, 0).total == pytest.approx(11.0)
    assert calc.calculate_daily(True, 100) == 300.00
    assert calc.calculate_daily(True, 99) == 260.00
