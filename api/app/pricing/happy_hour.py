"""Helpers for time-based discount pricing.

An outlet configures one happy hour window as two ``HH:MM`` wall-clock
values. Products may carry an alternate price that applies while the window
is active. Everything here is a pure function of its arguments: callers pass
the reference instant explicitly and nothing reads the system clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, tzinfo
from decimal import Decimal
from typing import Any

from config import get_settings

from ..domain.models import Product

HAPPY_HOUR_LABEL = " (Happy Hour)"


def _to_time(value: str) -> time:
    """Convert ``HH:MM`` or ``HH:MM:SS`` strings to minute-resolution times."""

    text = value.strip()
    fmt = "%H:%M:%S" if text.count(":") == 2 else "%H:%M"
    return datetime.strptime(text, fmt).time().replace(second=0, microsecond=0)


def _minute(value: time) -> time:
    return value.replace(second=0, microsecond=0, tzinfo=None)


@dataclass(frozen=True)
class DiscountWindow:
    """Outlet level happy hour window.

    Both ends are required for the window to count as configured. A window
    whose end is earlier than its start would cross midnight; such windows
    are not wrapped around and simply never match.
    """

    start: time | None = None
    end: time | None = None

    @classmethod
    def parse(
        cls, start: str | time | None, end: str | time | None
    ) -> "DiscountWindow":
        """Build a window from stored values, treating blanks as missing."""

        return cls(start=_coerce(start), end=_coerce(end))

    @property
    def configured(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def crosses_midnight(self) -> bool:
        return self.configured and self.end < self.start  # type: ignore[operator]


def _coerce(value: str | time | None) -> time | None:
    if value is None:
        return None
    if isinstance(value, time):
        return _minute(value)
    if not str(value).strip():
        return None
    return _to_time(str(value))


def _wall_clock(now: datetime | time, tz: tzinfo | None) -> time:
    """Return ``now`` as a minute-resolution time of day in the business zone.

    Aware datetimes are converted into ``tz``. Naive datetimes and bare
    times are already wall-clock values in that zone.
    """

    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(tz or get_settings().tzinfo)
        return _minute(now.time())
    return _minute(now)


def is_within_window(
    window: DiscountWindow | None,
    now: datetime | time,
    tz: tzinfo | None = None,
) -> bool:
    """Return ``True`` if ``now`` falls inside ``window``, both ends included."""

    if window is None or not window.configured:
        return False
    current = _wall_clock(now, tz)
    return window.start <= current <= window.end  # type: ignore[operator]


@dataclass(frozen=True)
class PriceQuote:
    """Unit price applicable at one instant."""

    unit_price: Decimal
    is_discounted: bool


def resolve_price(
    product: Product,
    window: DiscountWindow | None,
    now: datetime | time,
    tz: tzinfo | None = None,
) -> PriceQuote:
    """Return the unit price for ``product`` at ``now``.

    The discount price is used only when the product has one, the window is
    fully configured and ``now`` lies inside it. The discount price is not
    required to be lower than the regular price.
    """

    if (
        product.discount_price is None
        or window is None
        or not window.configured
    ):
        return PriceQuote(product.regular_price, False)
    if is_within_window(window, now, tz):
        return PriceQuote(product.discount_price, True)
    return PriceQuote(product.regular_price, False)


def resolve_display_name(
    product: Product,
    window: DiscountWindow | None,
    now: datetime | time,
    tz: tzinfo | None = None,
) -> str:
    """Return the product name, labelled when the discount price applies."""

    return _label(product, resolve_price(product, window, now, tz))


def _label(product: Product, quote: PriceQuote) -> str:
    if quote.is_discounted:
        return f"{product.name}{HAPPY_HOUR_LABEL}"
    return product.name


def quote_product(
    product: Product,
    window: DiscountWindow | None,
    now: datetime | time,
    tz: tzinfo | None = None,
) -> dict[str, Any]:
    """Return everything a menu card needs to render ``product`` at ``now``."""

    quote = resolve_price(product, window, now, tz)
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "description": product.description,
        "display_name": _label(product, quote),
        "regular_price": product.regular_price,
        "unit_price": quote.unit_price,
        "is_discounted": quote.is_discounted,
    }


def happy_hour_status(
    window: DiscountWindow | None,
    now: datetime | time,
    tz: tzinfo | None = None,
) -> dict[str, Any]:
    """Describe the outlet window for the happy hour indicator."""

    configured = window is not None and window.configured
    return {
        "configured": configured,
        "active": is_within_window(window, now, tz),
        "start": window.start.strftime("%H:%M") if configured else None,
        "end": window.end.strftime("%H:%M") if configured else None,
    }
