"""Test configuration for API tests."""
import os
import pathlib
import sys
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

# Provide default settings so tests can run without a full environment
# configuration. Tenant sessions are overridden per test, so the template is
# never used to open a real database.
os.environ.setdefault(
    "POSTGRES_TENANT_DSN_TEMPLATE", "sqlite+aiosqlite:///./tenant_{tenant_id}.db"
)
os.environ.setdefault("ORDER_LOCK_BACKEND", "local")

from api.app.models_tenant import (  # noqa: E402
    Base,
    DiningTable,
    OutletSettings,
    Product,
    Zone,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


async def seed_outlet(
    Session,
    *,
    plan: str = "tam_paket",
    start: str | None = "18:00",
    end: str | None = "20:00",
) -> SimpleNamespace:
    """Insert an outlet profile, one table and a small catalog."""

    async with Session() as session:
        session.add(
            OutletSettings(
                id=1,
                restaurant_name="Demo Bistro",
                plan=plan,
                happy_hour_start=start,
                happy_hour_end=end,
            )
        )
        zone = Zone(name="Salon")
        session.add(zone)
        await session.flush()

        table = DiningTable(zone_id=zone.id, table_number="1")
        beer = Product(
            name="Bira",
            category="İçecekler",
            price=Decimal("100.00"),
            happy_hour_price=Decimal("60.00"),
        )
        burger = Product(
            name="Hamburger",
            category="Ana Yemek",
            description="180 g dana köfte",
            price=Decimal("120.00"),
        )
        wine = Product(
            name="Şarap", category="İçecekler", price=Decimal("250.00"), is_active=False
        )
        session.add_all([table, beer, burger, wine])
        await session.commit()

        return SimpleNamespace(
            table_id=table.id,
            beer_id=beer.id,
            burger_id=burger.id,
            wine_id=wine.id,
        )


@pytest.fixture
def seed(session_factory):
    """Return a coroutine function seeding the test database."""

    async def _seed(**kwargs) -> SimpleNamespace:
        return await seed_outlet(session_factory, **kwargs)

    return _seed


@pytest.fixture
async def outlet(seed) -> SimpleNamespace:
    return await seed()
