"""Utilities for tenant-specific database engines.

Every outlet has its own database. The DSN template comes from
``Settings.postgres_tenant_dsn_template`` and must include a ``{tenant_id}``
placeholder, for example::

    postgresql+asyncpg://u:p@host:5432/tenant_{tenant_id}

Engines are created once per tenant and reused; :func:`dispose_engines`
closes them on shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import get_settings

from ..obs import add_query_logger

logger = logging.getLogger("api")

_engines: dict[str, AsyncEngine] = {}


def build_dsn(tenant_id: str) -> str:
    """Return a DSN for ``tenant_id`` based on the configured template."""

    template = get_settings().postgres_tenant_dsn_template
    if "{tenant_id}" not in template:
        raise RuntimeError("postgres_tenant_dsn_template lacks {tenant_id}")
    return template.format(tenant_id=tenant_id)


def get_engine(tenant_id: str) -> AsyncEngine:
    """Return the cached :class:`AsyncEngine` for ``tenant_id``."""

    engine = _engines.get(tenant_id)
    if engine is None:
        engine = create_async_engine(build_dsn(tenant_id))
        add_query_logger(engine, tenant_id)
        _engines[tenant_id] = engine
    return engine


async def dispose_engines() -> None:
    """Dispose every cached tenant engine."""

    while _engines:
        _, engine = _engines.popitem()
        await engine.dispose()


@asynccontextmanager
async def get_tenant_session(
    tenant_id: str,
) -> AsyncGenerator[AsyncSession, None]:
    """Yield an :class:`AsyncSession` bound to ``tenant_id``'s engine."""

    Session = async_sessionmaker(
        get_engine(tenant_id), expire_on_commit=False, class_=AsyncSession
    )
    async with Session() as session:
        yield session


async def run_tenant_migrations(tenant_id: str, dsn: str | None = None) -> None:
    """Upgrade ``tenant_id``'s database to the latest schema revision.

    ``dsn`` overrides the URL built from ``postgres_tenant_dsn_template``.
    """

    cfg = Config()
    cfg.set_main_option(
        "script_location",
        str(Path(__file__).resolve().parents[2] / "alembic_tenant"),
    )
    cfg.set_main_option("sqlalchemy.url", dsn or build_dsn(tenant_id))
    try:
        await asyncio.to_thread(command.upgrade, cfg, "head")
    except Exception:
        logger.exception("tenant migration failed", extra={"tenant": tenant_id})
        raise


__all__ = [
    "build_dsn",
    "get_engine",
    "dispose_engines",
    "get_tenant_session",
    "run_tenant_migrations",
]
