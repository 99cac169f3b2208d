"""Order and OrderItem models."""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Integer, Float, TIMESTAMP, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from . import Base


class Order(Base):
    """Customer orders for finished snacks."""

    __tablename__ = "orders"
    __table_args__ = (
        Index("idx_orders_status", "status"),
    )

    # Status constants
    STATUS_PENDING = "pending"
    STATUS_PROCESSING = "processing"
    STATUS_COMPLETED = "completed"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUSES = (
        STATUS_PENDING,
        STATUS_PROCESSING,
        STATUS_COMPLETED,
        STATUS_DELIVERED,
        STATUS_CANCELLED,
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_name = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_PENDING)
    order_date = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    @property
    def total_amount(self) -> float:
        return sum(item.total_price for item in self.items)

    def __repr__(self):
        return f"<Order(customer='{self.customer_name}', status='{self.status}')>"


class OrderItem(Base):
    """Line items on customer orders."""

    __tablename__ = "order_items"
    __table_args__ = (
        Index("idx_order_items_order", "order_id"),
        Index("idx_order_items_recipe", "recipe_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(UUID(as_uuid=True), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    recipe_id = Column(UUID(as_uuid=True), ForeignKey("recipes.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)  # quantity * unit_price

    # Relationships
    order = relationship("Order", back_populates="items")
    recipe = relationship("Recipe", back_populates="order_items")

    def __repr__(self):
        return f"<OrderItem(qty={self.quantity}, recipe_id={self.recipe_id})>"
