"""Value types for the catalog and the order aggregate.

Catalog rows and order rows arrive from the database as loosely typed
records. They are converted into these dataclasses at the repository
boundary so that prices are always :class:`~decimal.Decimal` and quantities
always positive integers.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

from .order_status import OrderStatus

ZERO = Decimal("0")


def to_money(value: object) -> Decimal:
    """Return ``value`` as a finite :class:`Decimal`.

    Floats are routed through ``str`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"not a money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"not a money amount: {value!r}")
    return amount


@dataclass(frozen=True)
class Product:
    """Catalog entry as seen by the pricing code."""

    id: object
    name: str
    regular_price: Decimal
    discount_price: Decimal | None = None
    active: bool = True
    category: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not str(self.name).strip():
            raise ValueError("product name is required")
        regular = to_money(self.regular_price)
        if regular <= ZERO:
            raise ValueError("regular_price must be positive")
        object.__setattr__(self, "regular_price", regular)
        if self.discount_price is not None:
            discount = to_money(self.discount_price)
            if discount <= ZERO:
                raise ValueError("discount_price must be positive")
            object.__setattr__(self, "discount_price", discount)


@dataclass
class OrderLine:
    """A priced line on an order.

    ``unit_price_snapshot`` is fixed when the line is created and cannot be
    reassigned; only ``quantity`` changes while the order is open.
    """

    product_id: object | None
    display_name: str
    unit_price_snapshot: Decimal
    quantity: int = 1
    id: object = field(default_factory=uuid.uuid4)
    created_at: datetime | None = None

    def __setattr__(self, name: str, value: object) -> None:
        if name == "unit_price_snapshot":
            if name in self.__dict__:
                raise AttributeError("unit_price_snapshot is immutable")
            value = to_money(value)
            if value < ZERO:
                raise ValueError("unit price cannot be negative")
        elif name == "quantity":
            _check_quantity(value)
        super().__setattr__(name, value)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price_snapshot * self.quantity


def _check_quantity(value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"quantity must be a positive integer, got {value!r}")


@dataclass
class Order:
    """Order aggregate: lines, derived total and payments.

    ``total_amount`` is only ever written by
    :func:`api.app.services.order_ledger.recompute_total`.
    """

    id: object = field(default_factory=uuid.uuid4)
    table_id: object | None = None
    status: OrderStatus = OrderStatus.OPEN
    lines: list[OrderLine] = field(default_factory=list)
    total_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    created_at: datetime | None = None
    closed_at: datetime | None = None
    version: int = 0

    @property
    def is_open(self) -> bool:
        return self.status is OrderStatus.OPEN

    @property
    def remaining(self) -> Decimal:
        """Total minus payments; negative when the guest overpaid."""

        return self.total_amount - self.paid_amount

    def find_line(self, line_id: object) -> OrderLine | None:
        for line in self.lines:
            if line.id == line_id or str(line.id) == str(line_id):
                return line
        return None


__all__ = ["Product", "OrderLine", "Order", "to_money", "ZERO"]
