import asyncio
import pathlib
import sys

import fakeredis.aioredis
import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from api.app.domain import LockTimeoutError  # noqa: E402
from api.app.services.order_locks import (  # noqa: E402
    LocalOrderLocks,
    RedisOrderLocks,
    build_locks,
)
from config import LockBackend, Settings  # noqa: E402


async def _exercise(locks) -> list[str]:
    events: list[str] = []

    async def worker(name: str) -> None:
        async with locks.hold("order-1"):
            events.append(f"{name}:in")
            await asyncio.sleep(0.05)
            events.append(f"{name}:out")

    await asyncio.gather(worker("a"), worker("b"))
    return events


def _serialized(events: list[str]) -> bool:
    return events[0].split(":")[0] == events[1].split(":")[0]


@pytest.mark.anyio
async def test_local_lock_serializes_same_order():
    events = await _exercise(LocalOrderLocks())
    assert _serialized(events)
    assert len(events) == 4


@pytest.mark.anyio
async def test_local_lock_does_not_block_other_orders():
    locks = LocalOrderLocks(wait_secs=0.1)
    async with locks.hold("order-1"):
        async with locks.hold("order-2"):
            pass


@pytest.mark.anyio
async def test_local_lock_times_out():
    locks = LocalOrderLocks(wait_secs=0.05)
    async with locks.hold("order-1"):
        with pytest.raises(LockTimeoutError) as exc:
            async with locks.hold("order-1"):
                pass
    assert exc.value.code == "ORDER_BUSY"
    # released after the holder exits
    async with locks.hold("order-1"):
        pass


@pytest.mark.anyio
async def test_redis_lock_serializes_same_order():
    redis = fakeredis.aioredis.FakeRedis()
    events = await _exercise(RedisOrderLocks(redis, timeout_secs=5, wait_secs=2))
    assert _serialized(events)
    assert await redis.get(RedisOrderLocks.key("order-1")) is None


@pytest.mark.anyio
async def test_redis_lock_times_out_while_held():
    redis = fakeredis.aioredis.FakeRedis()
    await redis.set(RedisOrderLocks.key("order-1"), "someone-else", px=5000)
    locks = RedisOrderLocks(redis, timeout_secs=5, wait_secs=0.1)
    with pytest.raises(LockTimeoutError):
        async with locks.hold("order-1"):
            pass


@pytest.mark.anyio
async def test_redis_lock_keeps_foreign_token(caplog):
    redis = fakeredis.aioredis.FakeRedis()
    locks = RedisOrderLocks(redis, timeout_secs=5, wait_secs=0.1)
    key = RedisOrderLocks.key("order-1")
    async with locks.hold("order-1"):
        # simulate expiry and takeover by another worker
        await redis.set(key, "other-token")
    assert await redis.get(key) == b"other-token"


def test_build_locks_selects_backend():
    local = build_locks(Settings(order_lock_backend="local", order_lock_wait_secs=1))
    assert isinstance(local, LocalOrderLocks)
    assert local.wait_secs == 1

    settings = Settings(order_lock_backend=LockBackend.REDIS, order_lock_timeout_secs=3)
    redis = fakeredis.aioredis.FakeRedis()
    shared = build_locks(settings, redis)
    assert isinstance(shared, RedisOrderLocks)
    assert shared.timeout_ms == 3000

    with pytest.raises(RuntimeError):
        build_locks(settings)
