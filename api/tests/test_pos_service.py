import asyncio
import pathlib
import sys
from datetime import datetime, timezone
from decimal import Decimal

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from api.app.domain import InvalidPaymentError  # noqa: E402
from api.app.repos_sqlalchemy import SqlCatalogRepo, SqlOrdersRepo  # noqa: E402
from api.app.services import LocalOrderLocks, PosService  # noqa: E402

# 18:30 in Istanbul
NOW = datetime(2024, 5, 1, 15, 30, tzinfo=timezone.utc)


def _service(session, locks) -> PosService:
    return PosService(
        SqlOrdersRepo(session), SqlCatalogRepo(session), locks, tenant="demo"
    )


async def _open_order(session_factory, locks, table_id=None):
    async with session_factory() as session:
        return await _service(session, locks).open_order(table_id, NOW)


async def _reload(session_factory, order_id):
    async with session_factory() as session:
        return await SqlOrdersRepo(session).get(order_id)


@pytest.mark.anyio
async def test_concurrent_adds_are_not_lost(session_factory, outlet):
    locks = LocalOrderLocks()
    order = await _open_order(session_factory, locks)

    async def add_one() -> None:
        async with session_factory() as session:
            await _service(session, locks).add_product(order.id, outlet.beer_id, NOW)

    await asyncio.gather(*(add_one() for _ in range(5)))

    loaded = await _reload(session_factory, order.id)
    assert [(l.quantity, l.unit_price_snapshot) for l in loaded.lines] == [
        (5, Decimal("60.00"))
    ]
    assert loaded.total_amount == Decimal("300.00")
    assert loaded.version == 5


@pytest.mark.anyio
async def test_concurrent_payments_and_adds(session_factory, outlet):
    locks = LocalOrderLocks()
    order = await _open_order(session_factory, locks)

    async def add_burger() -> None:
        async with session_factory() as session:
            await _service(session, locks).add_product(order.id, outlet.burger_id, NOW)

    async def pay(amount: str) -> None:
        async with session_factory() as session:
            await _service(session, locks).record_payment(order.id, amount)

    await asyncio.gather(
        add_burger(), pay("25.50"), add_burger(), pay("10"), pay("4.50")
    )

    loaded = await _reload(session_factory, order.id)
    assert loaded.lines[0].quantity == 2
    assert loaded.total_amount == Decimal("240.00")
    assert loaded.paid_amount == Decimal("40.00")
    assert loaded.remaining == Decimal("200.00")


@pytest.mark.anyio
async def test_returned_payment_matches_stored_payment(session_factory, outlet):
    locks = LocalOrderLocks()
    order = await _open_order(session_factory, locks)

    async with session_factory() as session:
        service = _service(session, locks)
        paid = await service.record_payment(order.id, Decimal("12.34"))
        with pytest.raises(InvalidPaymentError):
            await service.record_payment(order.id, Decimal("0.004"))

    loaded = await _reload(session_factory, order.id)
    assert paid.paid_amount == Decimal("12.34")
    assert loaded.paid_amount == paid.paid_amount


@pytest.mark.anyio
async def test_close_frees_table_with_the_order(session_factory, outlet):
    locks = LocalOrderLocks()
    order = await _open_order(session_factory, locks, outlet.table_id)

    async with session_factory() as session:
        closed = await _service(session, locks).close_order(order.id, NOW)
    assert closed.status.value == "closed"

    # the table can be opened again right away
    reopened = await _open_order(session_factory, locks, outlet.table_id)
    assert reopened.is_open
