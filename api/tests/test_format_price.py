import pathlib
import sys
from decimal import Decimal

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from api.app.pricing import format_price  # noqa: E402


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₺0,00"),
        (60, "₺60,00"),
        (Decimal("1234.5"), "₺1.234,50"),
        ("1234567.891", "₺1.234.567,89"),
        (Decimal("0.005"), "₺0,01"),
        (Decimal("-30.50"), "-₺30,50"),
    ],
)
def test_format_price_try(amount, expected):
    assert format_price(amount) == expected


def test_format_price_other_currencies():
    assert format_price(10, "EUR") == "€10,00"
    assert format_price(10, "GBP") == "GBP 10,00"


def test_format_price_rejects_garbage():
    with pytest.raises(ValueError):
        format_price("ten")
