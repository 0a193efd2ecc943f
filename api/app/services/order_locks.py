"""Per-order mutation locks.

Every change to an order is a read-modify-write of the whole aggregate, so
two terminals editing the same order must be serialized. Different orders
never share a lock.

``LocalOrderLocks`` keeps one :class:`asyncio.Lock` per order and works for a
single worker process. ``RedisOrderLocks`` stores a token under
``lock:order:<id>`` with ``SET NX PX`` so that several workers share the same
lock; the key expires on its own if the holder dies.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator

from config import LockBackend, Settings, get_settings

from ..domain import LockTimeoutError

logger = logging.getLogger("pos")

POLL_INTERVAL = 0.05


class LocalOrderLocks:
    """In-process lock registry keyed by order id."""

    def __init__(self, wait_secs: float = 5.0) -> None:
        self.wait_secs = wait_secs
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, order_id: object) -> asyncio.Lock:
        key = str(order_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, order_id: object) -> AsyncIterator[None]:
        lock = self._lock_for(order_id)
        try:
            await asyncio.wait_for(lock.acquire(), timeout=self.wait_secs)
        except asyncio.TimeoutError as exc:
            raise LockTimeoutError(order_id) from exc
        try:
            yield
        finally:
            lock.release()


class RedisOrderLocks:
    """Redis backed lock shared by all workers."""

    def __init__(
        self, redis, timeout_secs: float = 10.0, wait_secs: float = 5.0
    ) -> None:
        self.redis = redis
        self.timeout_ms = int(timeout_secs * 1000)
        self.wait_secs = wait_secs

    @staticmethod
    def key(order_id: object) -> str:
        return f"lock:order:{order_id}"

    async def _acquire(self, key: str, token: str) -> bool:
        deadline = time.monotonic() + self.wait_secs
        while True:
            if await self.redis.set(key, token, px=self.timeout_ms, nx=True):
                return True
            if time.monotonic() >= deadline:
                return False
            await asyncio.sleep(POLL_INTERVAL)

    async def _release(self, key: str, token: str) -> None:
        current = await self.redis.get(key)
        if isinstance(current, bytes):
            current = current.decode()
        if current == token:
            await self.redis.delete(key)
        else:
            logger.warning("order lock %s expired before release", key)

    @asynccontextmanager
    async def hold(self, order_id: object) -> AsyncIterator[None]:
        key = self.key(order_id)
        token = uuid.uuid4().hex
        if not await self._acquire(key, token):
            raise LockTimeoutError(order_id)
        try:
            yield
        finally:
            await self._release(key, token)


OrderLocks = LocalOrderLocks | RedisOrderLocks


def build_locks(settings: Settings | None = None, redis=None) -> OrderLocks:
    """Return the lock backend selected by ``order_lock_backend``."""

    settings = settings or get_settings()
    if settings.order_lock_backend is LockBackend.REDIS:
        if redis is None:
            raise RuntimeError("redis client required for the redis lock backend")
        return RedisOrderLocks(
            redis,
            timeout_secs=settings.order_lock_timeout_secs,
            wait_secs=settings.order_lock_wait_secs,
        )
    return LocalOrderLocks(wait_secs=settings.order_lock_wait_secs)


__all__ = ["LocalOrderLocks", "RedisOrderLocks", "OrderLocks", "build_locks"]
