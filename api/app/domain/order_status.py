"""Order status enumeration and allowed transitions."""

from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    """Enumerate the lifecycle states for an order."""

    OPEN = "open"
    CLOSED = "closed"
    CANCELLED = "cancelled"


TRANSITIONS: dict[OrderStatus, list[OrderStatus]] = {
    OrderStatus.OPEN: [OrderStatus.CLOSED, OrderStatus.CANCELLED],
    OrderStatus.CLOSED: [],
    OrderStatus.CANCELLED: [],
}


def can_transition(src: OrderStatus, dst: OrderStatus) -> bool:
    """Return ``True`` if an order can move from ``src`` to ``dst``."""

    return dst in TRANSITIONS.get(src, [])


def is_terminal(status: OrderStatus) -> bool:
    """Return ``True`` when no transition leaves ``status``."""

    return not TRANSITIONS.get(status)
