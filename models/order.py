from enum import Enum
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from core.db import Base


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    SERVED = "served"


def _utc_now():
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # a plain number, not a foreign key: tables can be deleted and recreated independently of their orders
    table_number = Column(Integer, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    version = Column(Integer, nullable=False, default=1)
    idempotency_key = Column(String(64), unique=True, nullable=True)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Order #{self.id} table={self.table_number} {self.status}>"


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    # catalog id kept by value so later menu edits never rewrite an order
    item_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=True)  # price at submission time

    # Relationships
    order = relationship("Order", back_populates="items")
