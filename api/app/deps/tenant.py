"""Dependency helpers for tenant resolution.

Outlet routes carry the tenant in the path (``/api/outlet/{tenant_id}/...``);
the session dependency binds to that tenant's database.
"""

from typing import AsyncGenerator

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.tenant import get_tenant_session as _tenant_session


def get_tenant_id(tenant_id: str) -> str:
    """Return the path tenant id, rejecting blanks."""
    if not tenant_id.strip():
        raise HTTPException(400, "Missing tenant id")
    return tenant_id


async def get_tenant_session(tenant_id: str) -> AsyncGenerator[AsyncSession, None]:
    """Yield an ``AsyncSession`` for ``tenant_id``."""
    async with _tenant_session(tenant_id) as session:
        yield session
