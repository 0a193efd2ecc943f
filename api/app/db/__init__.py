"""Database access for tenant schemas."""

from .tenant import (
    build_dsn,
    dispose_engines,
    get_engine,
    get_tenant_session,
    run_tenant_migrations,
)

__all__ = [
    "build_dsn",
    "dispose_engines",
    "get_engine",
    "get_tenant_session",
    "run_tenant_migrations",
]
