# schemas.py

"""Pydantic models for POS request payloads."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class OrderOpenIn(BaseModel):
    """Open an order, optionally on a table."""

    table_id: Optional[UUID] = None


class OrderItemIn(BaseModel):
    """Add one unit of a product to an order."""

    product_id: UUID


class LineQuantityIn(BaseModel):
    """Set a line's quantity. Zero or less removes the line."""

    quantity: int


class PaymentIn(BaseModel):
    """Partial or full payment against an order.

    The amount is validated by the ledger so that non-positive values map to
    the ``INVALID_PAYMENT`` error code instead of a generic 422.
    """

    amount: Decimal = Field(..., examples=["50.00"])
