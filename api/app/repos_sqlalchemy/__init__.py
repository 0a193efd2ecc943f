"""SQLAlchemy-backed repository implementations.

Each repository wraps one ``AsyncSession`` bound to a single tenant's
database; tenant scoping is therefore decided when the session is created
(see :mod:`api.app.db.tenant`).
"""

from .catalog_repo_sql import SqlCatalogRepo
from .orders_repo_sql import SqlOrdersRepo

__all__ = ["SqlCatalogRepo", "SqlOrdersRepo"]
