"""Price formatting for menus and receipts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..domain.models import to_money

ROUND = Decimal("0.01")

CURRENCY_SYMBOLS = {"TRY": "₺", "EUR": "€", "USD": "$"}


def format_price(amount: object, currency: str = "TRY") -> str:
    """Render ``amount`` Turkish style, e.g. ``₺1.234,50``.

    Thousands are grouped with ``.`` and decimals separated with ``,``.
    Negative amounts (overpaid balances) keep their sign in front.
    """

    value = to_money(amount).quantize(ROUND, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, cents = f"{abs(value):.2f}".partition(".")
    groups = []
    while len(whole) > 3:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    groups.insert(0, whole)
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{sign}{symbol}{'.'.join(groups)},{cents}"
