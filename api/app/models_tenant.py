"""Tenant-specific database models.

These models describe the per-tenant schema used by the application. They are
kept isolated from any application wiring so that they can be used in tests or
migrations independently."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class OutletSettings(Base):
    """Single-row outlet profile: plan and happy hour window."""

    __tablename__ = "outlet_settings"

    id = Column(Integer, primary_key=True, default=1)
    restaurant_name = Column(String, nullable=True)
    plan = Column(String, nullable=False, default="giris_paket")
    happy_hour_start = Column(String(8), nullable=True)
    happy_hour_end = Column(String(8), nullable=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Zone(Base):
    """Seating area grouping tables."""

    __tablename__ = "zones"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TableStatus(enum.Enum):
    """Lifecycle states for a dining table."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


class DiningTable(Base):
    """Dining tables inside a zone."""

    __tablename__ = "tables"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    zone_id = Column(Uuid, ForeignKey("zones.id", ondelete="CASCADE"), nullable=False)
    table_number = Column(String, nullable=False)
    status = Column(Enum(TableStatus), nullable=False, default=TableStatus.AVAILABLE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Product(Base):
    """Menu products with an optional happy hour price."""

    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    happy_hour_price = Column(Numeric(10, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Order(Base):
    """POS orders, optionally attached to a table.

    ``version`` is bumped on every save and checked by the repository so a
    stale copy of the order cannot overwrite a newer one.
    """

    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_id = Column(Uuid, ForeignKey("tables.id", ondelete="SET NULL"), nullable=True)
    status = Column(String, nullable=False, default="open")
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    paid_amount = Column(Numeric(10, 2), nullable=False, default=0)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    closed_at = Column(DateTime(timezone=True), nullable=True)


class OrderItem(Base):
    """Line items belonging to an order, priced at the time they were added."""

    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(
        Uuid, ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    product_name = Column(String, nullable=False)
    price_snapshot = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
