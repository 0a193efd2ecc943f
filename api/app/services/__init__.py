"""Service layer helpers for the API."""

from .order_locks import LocalOrderLocks, RedisOrderLocks, build_locks
from .pos_service import PosService, order_summary

__all__ = [
    "LocalOrderLocks",
    "RedisOrderLocks",
    "build_locks",
    "PosService",
    "order_summary",
]
