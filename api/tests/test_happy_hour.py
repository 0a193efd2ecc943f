import pathlib
import sys
from datetime import datetime, time, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from api.app.domain import Product  # noqa: E402
from api.app.pricing import (  # noqa: E402
    DiscountWindow,
    happy_hour_status,
    is_within_window,
    quote_product,
    resolve_display_name,
    resolve_price,
)

BEER = Product(id="p1", name="Bira", regular_price=100, discount_price=60)
WINDOW = DiscountWindow.parse("18:00", "20:00")


def test_price_outside_window_is_regular():
    quote = resolve_price(BEER, WINDOW, time(17, 59))
    assert quote.unit_price == Decimal("100")
    assert quote.is_discounted is False


def test_window_boundaries_are_inclusive():
    assert resolve_price(BEER, WINDOW, time(18, 0)).unit_price == Decimal("60")
    assert resolve_price(BEER, WINDOW, time(20, 0)).unit_price == Decimal("60")
    assert resolve_price(BEER, WINDOW, time(20, 1)).unit_price == Decimal("100")


def test_seconds_are_ignored_at_the_end_boundary():
    assert is_within_window(WINDOW, time(20, 0, 59)) is True
    assert is_within_window(WINDOW, datetime(2024, 5, 1, 20, 0, 45)) is True


def test_display_name_is_labelled_during_happy_hour():
    assert resolve_display_name(BEER, WINDOW, time(18, 0)) == "Bira (Happy Hour)"
    assert resolve_display_name(BEER, WINDOW, time(21, 0)) == "Bira"


def test_product_without_discount_price_never_discounts():
    burger = Product(id="p2", name="Hamburger", regular_price=120)
    quote = resolve_price(burger, WINDOW, time(19, 0))
    assert quote.unit_price == Decimal("120")
    assert quote.is_discounted is False
    assert resolve_display_name(burger, WINDOW, time(19, 0)) == "Hamburger"


@pytest.mark.parametrize(
    "window",
    [
        None,
        DiscountWindow(),
        DiscountWindow.parse("18:00", None),
        DiscountWindow.parse("", "20:00"),
    ],
)
def test_unconfigured_window_uses_regular_price(window):
    quote = resolve_price(BEER, window, time(19, 0))
    assert quote.unit_price == Decimal("100")
    assert not quote.is_discounted


def test_midnight_crossing_window_never_matches():
    late = DiscountWindow.parse("22:00", "02:00")
    assert late.crosses_midnight
    assert not is_within_window(late, time(23, 0))
    assert not is_within_window(late, time(1, 0))
    assert resolve_price(BEER, late, time(23, 30)).unit_price == Decimal("100")


def test_discount_price_may_exceed_regular_price():
    surge = Product(id="p3", name="Kokteyl", regular_price=100, discount_price=150)
    quote = resolve_price(surge, WINDOW, time(19, 0))
    assert quote.unit_price == Decimal("150")
    assert quote.is_discounted is True


def test_aware_instant_is_converted_to_business_zone():
    istanbul = ZoneInfo("Europe/Istanbul")
    # 15:30 UTC is 18:30 in Istanbul
    now = datetime(2024, 5, 1, 15, 30, tzinfo=timezone.utc)
    assert is_within_window(WINDOW, now, istanbul) is True
    assert is_within_window(WINDOW, now, ZoneInfo("UTC")) is False


def test_default_zone_comes_from_settings():
    now = datetime(2024, 5, 1, 15, 30, tzinfo=timezone.utc)
    assert resolve_price(BEER, WINDOW, now).is_discounted is True


def test_resolution_is_pure():
    now = time(18, 30)
    first = resolve_price(BEER, WINDOW, now)
    second = resolve_price(BEER, WINDOW, now)
    assert first == second
    assert BEER.regular_price == Decimal("100")
    assert BEER.discount_price == Decimal("60")


def test_window_parse_accepts_seconds():
    window = DiscountWindow.parse("18:00:00", "20:00:30")
    assert window.start == time(18, 0)
    assert window.end == time(20, 0)


def test_quote_product_for_menu_card():
    quote = quote_product(BEER, WINDOW, time(18, 15))
    assert quote == {
        "id": "p1",
        "name": "Bira",
        "category": None,
        "description": None,
        "display_name": "Bira (Happy Hour)",
        "regular_price": Decimal("100"),
        "unit_price": Decimal("60"),
        "is_discounted": True,
    }


def test_happy_hour_status():
    assert happy_hour_status(WINDOW, time(19, 0)) == {
        "configured": True,
        "active": True,
        "start": "18:00",
        "end": "20:00",
    }
    assert happy_hour_status(DiscountWindow(), time(19, 0)) == {
        "configured": False,
        "active": False,
        "start": None,
        "end": None,
    }
