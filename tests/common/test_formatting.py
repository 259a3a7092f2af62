from datetime import date

import pytest

from payload_tracker.common.datetime_utils import require_iso_date
from payload_tracker.common.formatting import format_currency, format_date, month_label
from payload_tracker.common.validators import parse_flag, parse_quantity
from payload_tracker.core.exceptions import ValidationError


def test_format_date_is_day_month_year():
    assert format_date("2024-03-05") == "05/03/2024"
    assert format_date(date(2024, 12, 31)) == "31/12/2024"


@pytest.mark.parametrize(
    "value,expected",
    [(0, "£0.00"), (3.5, "£3.50"), (1234.5, "£1,234.50"), (-2, "-£2.00"), (0.8 * 3, "£2.40")],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_month_label_is_capitalized_portuguese():
    assert month_label("2024-03") == "Março de 2024"
    assert month_label("2023-12") == "Dezembro de 2023"


def test_parse_quantity():
    assert parse_quantity("", "Parcelas") == 0
    assert parse_quantity(None, "Parcelas") == 0
    assert parse_quantity(" 12 ", "Parcelas") == 12
    assert parse_quantity(7, "Parcelas") == 7
    with pytest.raises(ValidationError):
        parse_quantity("abc", "Parcelas")
    with pytest.raises(ValidationError):
        parse_quantity("-1", "Parcelas")


def test_parse_flag():
    assert parse_flag("on") is True
    assert parse_flag("true") is True
    assert parse_flag(True) is True
    assert parse_flag("") is False
    assert parse_flag(None) is False


def test_require_iso_date():
    assert require_iso_date("2024-03-05") == date(2024, 3, 5)
    with pytest.raises(ValidationError, match="Selecione uma data"):
        require_iso_date("")
    with pytest.raises(ValidationError):
        require_iso_date("05/03/2024")
