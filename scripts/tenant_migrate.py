#!/usr/bin/env python3
"""Run tenant-specific Alembic migrations.

This CLI upgrades one outlet database to the latest revision of
``api/alembic_tenant``. The DSN comes from ``--dsn-template`` when given,
otherwise from ``POSTGRES_TENANT_DSN_TEMPLATE`` via the application settings.
Either template must contain a ``{tenant_id}`` placeholder, for example::

    postgresql+asyncpg://u:p@host:5432/tenant_{tenant_id}
"""

from __future__ import annotations

import argparse
import asyncio

from api.app.db.tenant import run_tenant_migrations


def migrate(tenant_id: str, dsn_template: str | None = None) -> None:
    """Run Alembic migrations for ``tenant_id``."""
    dsn = None
    if dsn_template:
        if "{tenant_id}" not in dsn_template:
            raise ValueError("DSN template lacks {tenant_id}")
        dsn = dsn_template.format(tenant_id=tenant_id)
    asyncio.run(run_tenant_migrations(tenant_id, dsn))


def main() -> None:
    parser = argparse.ArgumentParser(description="Run tenant migrations")
    parser.add_argument("--tenant", required=True, help="Tenant identifier")
    parser.add_argument(
        "--dsn-template",
        help="DSN template for tenant databases (overrides POSTGRES_TENANT_DSN_TEMPLATE)",
    )
    args = parser.parse_args()
    migrate(args.tenant, args.dsn_template)


if __name__ == "__main__":
    main()
