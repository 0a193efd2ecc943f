"""POS order workflows on top of the order ledger.

Each mutation runs as lock -> load -> ledger call -> save -> unlock so the
order aggregate is read-modify-written atomically with respect to other
mutations on the same order. The save is awaited before the updated order is
returned, so a returned order is durable.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, List

from ..domain import Order, OrderLine
from ..repos.catalog_repo import CatalogRepo
from ..repos.orders_repo import OrdersRepo
from . import order_ledger
from .order_locks import LocalOrderLocks, OrderLocks

logger = logging.getLogger("pos")


class PosService:
    """Order operations for one tenant."""

    def __init__(
        self,
        orders: OrdersRepo,
        catalog: CatalogRepo,
        locks: OrderLocks | None = None,
        tenant: str | None = None,
    ) -> None:
        self.orders = orders
        self.catalog = catalog
        self.locks = locks or LocalOrderLocks()
        self.tenant = tenant

    def _log(self, event: str, order: Order, **extra: object) -> None:
        logger.info(
            event,
            extra={"tenant": self.tenant, "order_id": str(order.id), **extra},
        )

    @asynccontextmanager
    async def _editing(self, order_id: object) -> AsyncIterator[Order]:
        async with self.locks.hold(f"{self.tenant}:{order_id}"):
            yield await self.orders.get(order_id)

    async def _mutate(
        self, order_id: object, change: Callable[[Order], object]
    ) -> tuple[Order, object]:
        async with self._editing(order_id) as order:
            result = change(order)
            await self.orders.save(order)
        return order, result

    async def open_order(self, table_id: object | None, now: datetime) -> Order:
        """Open an empty order, occupying ``table_id`` if one is given."""

        if table_id is None:
            order = await self.orders.create(None, now)
        else:
            async with self.locks.hold(f"{self.tenant}:table:{table_id}"):
                order = await self.orders.create(table_id, now)
        self._log("order.opened", order, table_id=str(table_id) if table_id else None)
        return order

    async def get_order(self, order_id: object) -> Order:
        return await self.orders.get(order_id)

    async def list_open_orders(self) -> List[Order]:
        return await self.orders.list_open()

    async def add_product(
        self, order_id: object, product_id: object, now: datetime
    ) -> tuple[Order, OrderLine]:
        """Add one unit of ``product_id`` priced at ``now``."""

        product = await self.catalog.get_product(product_id)
        window = await self.catalog.get_discount_window()
        order, line = await self._mutate(
            order_id,
            lambda o: order_ledger.add_product_to_order(o, product, window, now),
        )
        self._log(
            "order.line_added",
            order,
            line_id=str(line.id),
            unit_price=str(line.unit_price_snapshot),
            quantity=line.quantity,
        )
        return order, line

    async def set_line_quantity(
        self, order_id: object, line_id: object, quantity: int
    ) -> Order:
        order, _ = await self._mutate(
            order_id,
            lambda o: order_ledger.set_line_quantity(o, line_id, quantity),
        )
        self._log("order.line_quantity", order, line_id=str(line_id), quantity=quantity)
        return order

    async def remove_line(self, order_id: object, line_id: object) -> Order:
        order, _ = await self._mutate(
            order_id, lambda o: order_ledger.remove_line(o, line_id)
        )
        self._log("order.line_removed", order, line_id=str(line_id))
        return order

    async def record_payment(self, order_id: object, amount: object) -> Order:
        order, paid = await self._mutate(
            order_id, lambda o: order_ledger.record_payment(o, amount)
        )
        self._log("order.payment_recorded", order, paid=str(paid))
        return order

    async def close_order(self, order_id: object, now: datetime) -> Order:
        """Close the order and hand its table back."""

        order, _ = await self._mutate(
            order_id, lambda o: order_ledger.close_order(o, now)
        )
        self._log("order.closed", order, total=str(order.total_amount))
        return order

    async def cancel_order(self, order_id: object, now: datetime) -> Order:
        order, _ = await self._mutate(
            order_id, lambda o: order_ledger.cancel_order(o, now)
        )
        self._log("order.cancelled", order)
        return order


def order_summary(order: Order) -> dict:
    """Return the read accessors of ``order`` as plain values."""

    return {
        "id": str(order.id),
        "table_id": str(order.table_id) if order.table_id is not None else None,
        "status": order.status.value,
        "total_amount": order.total_amount,
        "paid_amount": order.paid_amount,
        "remaining": order.remaining,
        "lines": [
            {
                "id": str(line.id),
                "product_id": str(line.product_id) if line.product_id else None,
                "display_name": line.display_name,
                "unit_price": line.unit_price_snapshot,
                "quantity": line.quantity,
                "line_total": line.line_total,
            }
            for line in order.lines
        ],
        "created_at": order.created_at,
        "closed_at": order.closed_at,
    }


__all__ = ["PosService", "order_summary"]
