import pathlib
import sys
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from api.app.db.tenant import run_tenant_migrations  # noqa: E402
from api.app.models_tenant import (  # noqa: E402
    Base,
    DiningTable,
    OutletSettings,
    Product,
    Zone,
)
from api.app.repos_sqlalchemy import SqlCatalogRepo, SqlOrdersRepo  # noqa: E402
from scripts.tenant_migrate import migrate  # noqa: E402

NOW = datetime(2024, 5, 1, 15, 30, tzinfo=timezone.utc)


def _columns(inspector, table: str) -> set[str]:
    return {c["name"] for c in inspector.get_columns(table)}


def test_upgrade_to_head_matches_models(tmp_path):
    template = f"sqlite+aiosqlite:///{tmp_path}/tenant_{{tenant_id}}.db"
    migrate("demo", template)

    engine = create_engine(f"sqlite:///{tmp_path}/tenant_demo.db")
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert set(Base.metadata.tables) <= tables
        for name, table in Base.metadata.tables.items():
            assert _columns(inspector, name) == {c.name for c in table.columns}
        with engine.connect() as conn:
            version = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
        assert version == "0001_initial_tenant"
    finally:
        engine.dispose()


def test_upgrade_is_idempotent(tmp_path):
    template = f"sqlite+aiosqlite:///{tmp_path}/tenant_{{tenant_id}}.db"
    migrate("demo", template)
    migrate("demo", template)
    assert (tmp_path / "tenant_demo.db").exists()


def test_template_requires_placeholder():
    with pytest.raises(ValueError):
        migrate("demo", "sqlite+aiosqlite:///tenant.db")


@pytest.mark.anyio
async def test_repositories_run_on_migrated_schema(tmp_path):
    dsn = f"sqlite+aiosqlite:///{tmp_path}/tenant_demo.db"
    await run_tenant_migrations("demo", dsn)

    engine = create_async_engine(dsn)
    Session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with Session() as session:
            session.add(
                OutletSettings(id=1, happy_hour_start="18:00", happy_hour_end="20:00")
            )
            zone = Zone(name="Bahçe")
            session.add(zone)
            await session.flush()
            table = DiningTable(zone_id=zone.id, table_number="7")
            beer = Product(
                name="Bira",
                category="İçecekler",
                price=Decimal("100.00"),
                happy_hour_price=Decimal("60.00"),
            )
            session.add_all([table, beer])
            await session.commit()

        async with Session() as session:
            catalog = SqlCatalogRepo(session)
            assert [p.name for p in await catalog.list_products()] == ["Bira"]
            assert (await catalog.get_discount_window()).configured
            order = await SqlOrdersRepo(session).create(table.id, NOW)

        async with Session() as session:
            loaded = await SqlOrdersRepo(session).get(order.id)
        assert loaded.is_open
        assert loaded.table_id == table.id
    finally:
        await engine.dispose()
