"""SQLAlchemy-backed repository for POS orders.

The order aggregate is loaded with all of its lines and written back as a
whole. Writes are guarded by ``orders.version``: the update only matches
the revision the caller loaded, so a save based on a stale copy fails with
:class:`~api.app.domain.ConcurrentUpdateError` instead of silently losing
another terminal's change. Closing or cancelling an order frees its table
in the same commit.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain import (
    ConcurrentUpdateError,
    NotFoundError,
    Order,
    OrderLine,
    OrderStatus,
    TableOccupiedError,
    to_money,
)
from ..models_tenant import (
    DiningTable,
    Order as OrderModel,
    OrderItem,
    TableStatus,
)
from ..repos.orders_repo import OrdersRepo


def _as_uuid(value: object) -> uuid.UUID | None:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _line_from_row(row: OrderItem) -> OrderLine:
    return OrderLine(
        id=row.id,
        product_id=row.product_id,
        display_name=row.product_name,
        unit_price_snapshot=row.price_snapshot,
        quantity=row.quantity,
        created_at=row.created_at,
    )


def _order_from_rows(row: OrderModel, items: List[OrderItem]) -> Order:
    return Order(
        id=row.id,
        table_id=row.table_id,
        status=OrderStatus(row.status),
        lines=[_line_from_row(i) for i in items],
        total_amount=to_money(row.total_amount or 0),
        paid_amount=to_money(row.paid_amount or 0),
        created_at=row.created_at,
        closed_at=row.closed_at,
        version=row.version,
    )


class SqlOrdersRepo(OrdersRepo):
    """Order persistence against one tenant database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _items(self, order_id: uuid.UUID) -> List[OrderItem]:
        result = await self.session.scalars(
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.position)
            .execution_options(populate_existing=True)
        )
        return list(result.all())

    async def get(self, order_id) -> Order:
        pk = _as_uuid(order_id)
        row = await self.session.get(OrderModel, pk, populate_existing=True) if pk else None
        if row is None:
            raise NotFoundError("order", order_id)
        return _order_from_rows(row, await self._items(row.id))

    async def create(self, table_id, now: datetime) -> Order:
        table = None
        if table_id is not None:
            pk = _as_uuid(table_id)
            table = await self.session.get(DiningTable, pk) if pk else None
            if table is None:
                raise NotFoundError("table", table_id)
            busy = await self.session.scalar(
                select(OrderModel.id).where(
                    OrderModel.table_id == table.id,
                    OrderModel.status == OrderStatus.OPEN.value,
                )
            )
            if busy is not None:
                raise TableOccupiedError(table_id)

        row = OrderModel(
            table_id=table.id if table is not None else None,
            status=OrderStatus.OPEN.value,
            total_amount=0,
            paid_amount=0,
            version=0,
            created_at=now,
        )
        self.session.add(row)
        if table is not None:
            table.status = TableStatus.OCCUPIED
        await self.session.flush()
        order = _order_from_rows(row, [])
        await self.session.commit()
        return order

    async def save(self, order: Order) -> Order:
        pk = _as_uuid(order.id)
        result = await self.session.execute(
            update(OrderModel)
            .where(OrderModel.id == pk, OrderModel.version == order.version)
            .values(
                status=order.status.value,
                total_amount=order.total_amount,
                paid_amount=order.paid_amount,
                closed_at=order.closed_at,
                version=order.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.session.rollback()
            raise ConcurrentUpdateError(order.id, order.version)

        stored = {row.id: row for row in await self._items(pk)}
        keep = set()
        for position, line in enumerate(order.lines):
            line_pk = _as_uuid(line.id)
            keep.add(line_pk)
            row = stored.get(line_pk)
            if row is None:
                self.session.add(
                    OrderItem(
                        id=line_pk,
                        order_id=pk,
                        product_id=_as_uuid(line.product_id),
                        product_name=line.display_name,
                        price_snapshot=line.unit_price_snapshot,
                        quantity=line.quantity,
                        position=position,
                        created_at=line.created_at or order.created_at,
                    )
                )
            else:
                row.quantity = line.quantity
                row.position = position
        gone = [item_id for item_id in stored if item_id not in keep]
        if gone:
            await self.session.execute(
                delete(OrderItem)
                .where(OrderItem.id.in_(gone))
                .execution_options(synchronize_session=False)
            )
        if not order.is_open and order.table_id is not None:
            await self.session.execute(
                update(DiningTable)
                .where(DiningTable.id == _as_uuid(order.table_id))
                .values(status=TableStatus.AVAILABLE)
            )
        await self.session.commit()
        order.version += 1
        return order

    async def list_open(self) -> List[Order]:
        rows = (
            await self.session.scalars(
                select(OrderModel)
                .where(OrderModel.status == OrderStatus.OPEN.value)
                .order_by(OrderModel.created_at)
                .execution_options(populate_existing=True)
            )
        ).all()
        return [_order_from_rows(r, await self._items(r.id)) for r in rows]


__all__ = ["SqlOrdersRepo"]
