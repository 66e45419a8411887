from decimal import Decimal

import pytest

from src.paytracker.paytracker.common.validators import parse_amount
from src.paytracker.paytracker.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1 500", Decimal("1500.00")),
        ("12,5", Decimal("12.50")),
        (Decimal("0.019"), Decimal("0.02")),
        (250, Decimal("250.00")),
        ("9999999999.99", Decimal("9999999999.99")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw, "Montant") == expected


@pytest.mark.parametrize("raw", ["0", "-10", "0.004", "0,001"])
def test_amount_rounding_to_zero_is_refused(raw):
    with pytest.raises(ValidationError, match="positif"):
        parse_amount(raw, "Montant")


@pytest.mark.parametrize("raw", ["1e30", "10000000000", "-1e40"])
def test_amount_beyond_column_range_is_refused(raw):
    with pytest.raises(ValidationError):
        parse_amount(raw, "Montant")


@pytest.mark.parametrize("raw", ["abc", "", None, "NaN", "Infinity"])
def test_non_numeric_amount_is_refused(raw):
    with pytest.raises(ValidationError, match="invalide"):
        parse_amount(raw, "Montant")
