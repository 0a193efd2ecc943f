"""Typed failures raised by the pricing and order ledger code.

Every error carries a stable ``code`` that the HTTP layer copies into the
error envelope. Messages are meant for logs; user facing text is produced by
the client from the code.
"""

from __future__ import annotations


class PosError(Exception):
    """Base class for order and pricing failures."""

    code = "POS_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class OrderNotOpenError(PosError):
    """Raised when a line or payment mutation targets a non-open order."""

    code = "ORDER_NOT_OPEN"

    def __init__(self, order_id: object, status: str) -> None:
        super().__init__(f"order {order_id} is {status}")
        self.order_id = order_id
        self.status = status


class InactiveProductError(PosError):
    """Raised when an inactive product is added to an order."""

    code = "PRODUCT_INACTIVE"

    def __init__(self, product_id: object) -> None:
        super().__init__(f"product {product_id} is not available for sale")
        self.product_id = product_id


class InvalidPaymentError(PosError):
    """Raised for zero, negative or non-numeric payment amounts."""

    code = "INVALID_PAYMENT"

    def __init__(self, amount: object) -> None:
        super().__init__(f"payment amount must be positive, got {amount!r}")
        self.amount = amount


class NotFoundError(PosError):
    """Raised when a referenced order, line, product or table does not exist."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, ident: object) -> None:
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident


class TableOccupiedError(PosError):
    """Raised when opening an order on a table that already has one open."""

    code = "TABLE_OCCUPIED"

    def __init__(self, table_id: object) -> None:
        super().__init__(f"table {table_id} already has an open order")
        self.table_id = table_id


class ConcurrentUpdateError(PosError):
    """Raised when a saved order no longer matches the stored revision."""

    code = "CONCURRENT_UPDATE"

    def __init__(self, order_id: object, expected_version: int) -> None:
        super().__init__(
            f"order {order_id} changed since revision {expected_version}"
        )
        self.order_id = order_id
        self.expected_version = expected_version


class LockTimeoutError(PosError):
    """Raised when a per-order lock cannot be acquired in time."""

    code = "ORDER_BUSY"

    def __init__(self, order_id: object) -> None:
        super().__init__(f"order {order_id} is locked by another terminal")
        self.order_id = order_id


__all__ = [
    "PosError",
    "OrderNotOpenError",
    "InactiveProductError",
    "InvalidPaymentError",
    "NotFoundError",
    "TableOccupiedError",
    "ConcurrentUpdateError",
    "LockTimeoutError",
]
