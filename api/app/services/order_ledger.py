"""Snapshot pricing and running totals for POS orders.

Functions in this module mutate an in-memory :class:`~api.app.domain.Order`
and never touch storage. The caller is responsible for holding the order's
lock and persisting the aggregate afterwards (see
:mod:`api.app.services.pos_service`).

A line's unit price is frozen when the line is created. Adding a product
again merges into an existing line only when the freshly resolved price is
identical to that line's snapshot, so a product whose happy hour status
changed mid-session ends up on a second line at the new price.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal, InvalidOperation

from ..domain import (
    InactiveProductError,
    InvalidPaymentError,
    NotFoundError,
    Order,
    OrderLine,
    OrderNotOpenError,
    OrderStatus,
    Product,
    can_transition,
    to_money,
)
from ..domain.models import ZERO
from ..pricing import DiscountWindow, resolve_display_name, resolve_price

CENT = Decimal("0.01")


def _require_open(order: Order) -> None:
    if not order.is_open:
        raise OrderNotOpenError(order.id, order.status.value)


def recompute_total(order: Order) -> Decimal:
    """Set and return ``order.total_amount`` from its lines."""

    total = sum((line.line_total for line in order.lines), ZERO)
    order.total_amount = total
    return total


def add_product_to_order(
    order: Order,
    product: Product,
    window: DiscountWindow | None,
    now: datetime | time,
) -> OrderLine:
    """Add one unit of ``product`` priced at ``now``.

    Returns the line that received the unit, either an existing line with
    the same product and identical snapshot price, or a new one.
    """

    _require_open(order)
    if not product.active:
        raise InactiveProductError(product.id)

    quote = resolve_price(product, window, now)
    for line in order.lines:
        if (
            line.product_id == product.id
            and line.unit_price_snapshot == quote.unit_price
        ):
            line.quantity += 1
            recompute_total(order)
            return line

    created_at = now if isinstance(now, datetime) else None
    line = OrderLine(
        product_id=product.id,
        display_name=resolve_display_name(product, window, now),
        unit_price_snapshot=quote.unit_price,
        quantity=1,
        created_at=created_at,
    )
    order.lines.append(line)
    recompute_total(order)
    return line


def set_line_quantity(order: Order, line_id: object, quantity: int) -> Order:
    """Set a line's quantity; zero or less removes the line."""

    _require_open(order)
    line = order.find_line(line_id)
    if line is None:
        raise NotFoundError("order line", line_id)
    if quantity <= 0:
        order.lines.remove(line)
    else:
        line.quantity = quantity
    recompute_total(order)
    return order


def remove_line(order: Order, line_id: object) -> Order:
    """Drop a line regardless of its quantity."""

    return set_line_quantity(order, line_id, 0)


def record_payment(order: Order, amount: object) -> Decimal:
    """Add ``amount`` to the order's payments and return the new paid total.

    Payments beyond the total are accepted; :attr:`Order.remaining` then
    goes negative. Amounts finer than a cent are rejected; paid
    totals are stored with two decimal places.
    """

    _require_open(order)
    try:
        value = to_money(amount)
        whole_cents = value == value.quantize(CENT)
    except (ValueError, InvalidOperation) as exc:
        raise InvalidPaymentError(amount) from exc
    if value <= ZERO or not whole_cents:
        raise InvalidPaymentError(amount)
    order.paid_amount = order.paid_amount + value
    return order.paid_amount


def _finish(order: Order, status: OrderStatus, now: datetime) -> Order:
    if not can_transition(order.status, status):
        raise OrderNotOpenError(order.id, order.status.value)
    recompute_total(order)
    order.status = status
    order.closed_at = now
    return order


def close_order(order: Order, now: datetime) -> Order:
    """Finalize an open order.

    After this the lines and total are frozen. ``order.table_id`` tells the
    caller which table to release.
    """

    return _finish(order, OrderStatus.CLOSED, now)


def cancel_order(order: Order, now: datetime) -> Order:
    """Administratively cancel an open order."""

    return _finish(order, OrderStatus.CANCELLED, now)


__all__ = [
    "add_product_to_order",
    "set_line_quantity",
    "remove_line",
    "recompute_total",
    "record_payment",
    "close_order",
    "cancel_order",
]
