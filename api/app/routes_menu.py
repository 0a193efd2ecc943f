"""Digital menu endpoint priced at request time."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from config import get_settings

from .deps.pos import digital_menu_enabled, get_catalog, get_now
from .pricing import format_price, happy_hour_status, quote_product
from .repos_sqlalchemy import SqlCatalogRepo
from .utils.responses import ok

router = APIRouter()


@router.get(
    "/api/outlet/{tenant_id}/menu",
    dependencies=[Depends(digital_menu_enabled)],
)
async def priced_menu(
    tenant_id: str,
    catalog: SqlCatalogRepo = Depends(get_catalog),
    now: datetime = Depends(get_now),
) -> dict:
    """Return active products in category order, priced for right now."""

    settings = get_settings()
    window = await catalog.get_discount_window()
    items = []
    categories: list[str] = []
    for product in await catalog.list_products(active_only=True):
        quote = quote_product(product, window, now)
        quote["price_label"] = format_price(quote["unit_price"], settings.currency)
        if quote["is_discounted"]:
            quote["strike_price_label"] = format_price(
                quote["regular_price"], settings.currency
            )
        items.append(quote)
        if product.category and product.category not in categories:
            categories.append(product.category)
    return ok(
        {
            "happy_hour": happy_hour_status(window, now),
            "categories": categories,
            "items": items,
        }
    )
