"""Order taking endpoints for staff terminals.

Every mutating endpoint returns the full order so the terminal can redraw
lines, total, paid amount and remaining balance from one response.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from .deps.pos import get_now, get_pos_service, pos_enabled
from .schemas import LineQuantityIn, OrderItemIn, OrderOpenIn, PaymentIn
from .services import PosService, order_summary
from .utils.responses import ok

router = APIRouter(
    prefix="/api/outlet/{tenant_id}/orders",
    dependencies=[Depends(pos_enabled)],
)


@router.post("")
async def open_order(
    payload: OrderOpenIn,
    service: PosService = Depends(get_pos_service),
    now: datetime = Depends(get_now),
) -> dict:
    """Open an empty order, occupying the table when one is given."""

    order = await service.open_order(payload.table_id, now)
    return ok(order_summary(order))


@router.get("")
async def list_open_orders(service: PosService = Depends(get_pos_service)) -> dict:
    orders = await service.list_open_orders()
    return ok([order_summary(o) for o in orders])


@router.get("/{order_id}")
async def get_order(order_id: str, service: PosService = Depends(get_pos_service)) -> dict:
    return ok(order_summary(await service.get_order(order_id)))


@router.post("/{order_id}/items")
async def add_item(
    order_id: str,
    payload: OrderItemIn,
    service: PosService = Depends(get_pos_service),
    now: datetime = Depends(get_now),
) -> dict:
    """Add one unit of a product at the price that applies now."""

    order, line = await service.add_product(order_id, payload.product_id, now)
    data = order_summary(order)
    data["line_id"] = str(line.id)
    return ok(data)


@router.patch("/{order_id}/items/{line_id}")
async def set_item_quantity(
    order_id: str,
    line_id: str,
    payload: LineQuantityIn,
    service: PosService = Depends(get_pos_service),
) -> dict:
    order = await service.set_line_quantity(order_id, line_id, payload.quantity)
    return ok(order_summary(order))


@router.delete("/{order_id}/items/{line_id}")
async def remove_item(
    order_id: str, line_id: str, service: PosService = Depends(get_pos_service)
) -> dict:
    return ok(order_summary(await service.remove_line(order_id, line_id)))


@router.post("/{order_id}/payments")
async def record_payment(
    order_id: str,
    payload: PaymentIn,
    service: PosService = Depends(get_pos_service),
) -> dict:
    order = await service.record_payment(order_id, payload.amount)
    return ok(order_summary(order))


@router.post("/{order_id}/close")
async def close_order(
    order_id: str,
    service: PosService = Depends(get_pos_service),
    now: datetime = Depends(get_now),
) -> dict:
    """Close the order; its table becomes available again."""

    return ok(order_summary(await service.close_order(order_id, now)))


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: str,
    service: PosService = Depends(get_pos_service),
    now: datetime = Depends(get_now),
) -> dict:
    """Administrative cancellation of an open order."""

    return ok(order_summary(await service.cancel_order(order_id, now)))
