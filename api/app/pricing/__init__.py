"""Happy hour pricing helpers."""

from .format import format_price
from .happy_hour import (
    HAPPY_HOUR_LABEL,
    DiscountWindow,
    PriceQuote,
    happy_hour_status,
    is_within_window,
    quote_product,
    resolve_display_name,
    resolve_price,
)

__all__ = [
    "HAPPY_HOUR_LABEL",
    "DiscountWindow",
    "PriceQuote",
    "format_price",
    "happy_hour_status",
    "is_within_window",
    "quote_product",
    "resolve_display_name",
    "resolve_price",
]
