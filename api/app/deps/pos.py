"""Dependencies wiring the POS service into routes."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..repos_sqlalchemy import SqlCatalogRepo, SqlOrdersRepo
from ..services import PosService
from ..services.order_locks import OrderLocks
from ..tiers import Feature, Plan, require_feature
from .tenant import get_tenant_id, get_tenant_session


def get_now() -> datetime:
    """Current instant; overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)


def get_locks(request: Request) -> OrderLocks:
    return request.app.state.order_locks


def get_catalog(session: AsyncSession = Depends(get_tenant_session)) -> SqlCatalogRepo:
    return SqlCatalogRepo(session)


async def get_plan(catalog: SqlCatalogRepo = Depends(get_catalog)) -> Plan | str:
    return await catalog.get_plan()


def get_pos_service(
    tenant_id: str = Depends(get_tenant_id),
    session: AsyncSession = Depends(get_tenant_session),
    locks: OrderLocks = Depends(get_locks),
) -> PosService:
    return PosService(
        SqlOrdersRepo(session), SqlCatalogRepo(session), locks, tenant=tenant_id
    )


pos_enabled = require_feature(Feature.POS, get_plan)
digital_menu_enabled = require_feature(Feature.DIGITAL_MENU, get_plan)
