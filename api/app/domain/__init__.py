"""Domain models and helpers."""

from .errors import (
    ConcurrentUpdateError,
    InactiveProductError,
    InvalidPaymentError,
    LockTimeoutError,
    NotFoundError,
    OrderNotOpenError,
    PosError,
    TableOccupiedError,
)
from .models import Order, OrderLine, Product, to_money
from .order_status import OrderStatus, TRANSITIONS, can_transition, is_terminal

__all__ = [
    "OrderStatus",
    "TRANSITIONS",
    "can_transition",
    "is_terminal",
    "Order",
    "OrderLine",
    "Product",
    "to_money",
    "PosError",
    "OrderNotOpenError",
    "InactiveProductError",
    "InvalidPaymentError",
    "NotFoundError",
    "TableOccupiedError",
    "ConcurrentUpdateError",
    "LockTimeoutError",
]
