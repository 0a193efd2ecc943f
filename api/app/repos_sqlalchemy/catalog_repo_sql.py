"""SQLAlchemy-backed catalog reads.

Rows are converted into :class:`~api.app.domain.Product` here so nothing
downstream handles raw ORM objects.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain import NotFoundError, Product
from ..models_tenant import OutletSettings, Product as ProductModel
from ..pricing import DiscountWindow
from ..repos.catalog_repo import CatalogRepo
from ..tiers import Plan

logger = logging.getLogger("api.config")


def _as_uuid(value: object) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def product_from_row(row: ProductModel) -> Product:
    """Return the domain product for ``row``."""

    return Product(
        id=row.id,
        name=row.name,
        regular_price=row.price,
        discount_price=row.happy_hour_price,
        active=bool(row.is_active),
        category=row.category,
        description=row.description,
    )


class SqlCatalogRepo(CatalogRepo):
    """Catalog reads against one tenant database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_product(self, product_id) -> Product:
        pk = _as_uuid(product_id)
        row = await self.session.get(ProductModel, pk) if pk else None
        if row is None:
            raise NotFoundError("product", product_id)
        return product_from_row(row)

    async def list_products(self, active_only: bool = True) -> list[Product]:
        query = select(ProductModel).order_by(
            ProductModel.category, ProductModel.name
        )
        if active_only:
            query = query.where(ProductModel.is_active.is_(True))
        rows = (await self.session.scalars(query)).all()
        return [product_from_row(r) for r in rows]

    async def _outlet(self) -> OutletSettings | None:
        return await self.session.get(OutletSettings, 1)

    async def get_discount_window(self) -> DiscountWindow:
        outlet = await self._outlet()
        if outlet is None:
            return DiscountWindow()
        try:
            window = DiscountWindow.parse(
                outlet.happy_hour_start, outlet.happy_hour_end
            )
        except ValueError:
            logger.warning(
                "happy hour %r-%r is not HH:MM and is ignored",
                outlet.happy_hour_start,
                outlet.happy_hour_end,
            )
            return DiscountWindow()
        if window.crosses_midnight:
            logger.warning(
                "happy hour %s-%s crosses midnight and will never match",
                outlet.happy_hour_start,
                outlet.happy_hour_end,
            )
        return window

    async def get_plan(self) -> Plan | str:
        outlet = await self._outlet()
        if outlet is None:
            return Plan.ENTRY
        try:
            return Plan(outlet.plan)
        except ValueError:
            logger.warning("unknown plan %r on outlet settings", outlet.plan)
            return outlet.plan


__all__ = ["SqlCatalogRepo", "product_from_row"]
