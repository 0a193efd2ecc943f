from __future__ import annotations

import logging
import os
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

SLOW_QUERY_MS = int(os.getenv("DB_SLOW_QUERY_MS", "200"))

logger = logging.getLogger("obs")


def _compact(statement: str, limit: int = 200) -> str:
    sql = " ".join(statement.split())
    if len(sql) > limit:
        sql = sql[: limit - 3] + "..."
    return sql


def add_query_logger(engine: Engine, tenant: str) -> None:
    """Warn about statements on ``engine`` slower than ``DB_SLOW_QUERY_MS``."""

    target = engine.sync_engine if hasattr(engine, "sync_engine") else engine

    def before_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        context._query_start_time = time.perf_counter()

    def after_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        total_ms = (time.perf_counter() - context._query_start_time) * 1000
        if total_ms > SLOW_QUERY_MS:
            logger.warning(
                "slow query %dms sql=%s",
                int(total_ms),
                _compact(statement),
                extra={"tenant": tenant, "latency_ms": int(total_ms)},
            )

    event.listen(target, "before_cursor_execute", before_cursor_execute)
    event.listen(target, "after_cursor_execute", after_cursor_execute)
