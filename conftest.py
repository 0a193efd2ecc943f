import os

# Default to SQLite and the in-process lock backend for tests
os.environ.setdefault(
    "POSTGRES_TENANT_DSN_TEMPLATE", "sqlite+aiosqlite:///./tenant_{tenant_id}.db"
)
os.environ.setdefault("ORDER_LOCK_BACKEND", "local")
os.environ.setdefault("TIMEZONE", "Europe/Istanbul")
