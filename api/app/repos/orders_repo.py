"""Repository interface for order operations."""

from abc import ABC, abstractmethod


class OrdersRepo(ABC):
    """Contract for order persistence.

    Implementations load and store the whole order aggregate. ``save`` must
    refuse to overwrite an order whose stored revision differs from
    ``order.version``.
    """

    @abstractmethod
    async def get(self, order_id):
        """Return the order aggregate or raise ``NotFoundError``."""
        raise NotImplementedError

    @abstractmethod
    async def create(self, table_id, now):
        """Open a new empty order, occupying ``table_id`` when given."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, order):
        """Persist lines, totals and status, bumping the revision.

        Saving a closed or cancelled order also frees its table.
        """
        raise NotImplementedError

    @abstractmethod
    async def list_open(self):
        """List all open orders."""
        raise NotImplementedError
