"""Repository interface for catalog and outlet configuration reads."""

from abc import ABC, abstractmethod


class CatalogRepo(ABC):
    """Contract for read-only access to products and outlet settings."""

    @abstractmethod
    async def get_product(self, product_id):
        """Return a ``Product`` or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def list_products(self, active_only=True):
        """Return products ordered by category, then name."""
        raise NotImplementedError

    @abstractmethod
    async def get_discount_window(self):
        """Return the outlet's ``DiscountWindow``."""
        raise NotImplementedError

    @abstractmethod
    async def get_plan(self):
        """Return the outlet's subscription ``Plan``."""
        raise NotImplementedError
