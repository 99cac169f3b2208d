"""Ingredient, Stock, and Purchase models."""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Float, TIMESTAMP, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import object_session, relationship

from . import Base


class Ingredient(Base):
    """Raw ingredient with the unit it is stocked and purchased in."""

    __tablename__ = "ingredients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    unit = Column(String(20), nullable=False)  # 'kg', 'g', 'litre', 'ml', 'piece'
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    stock = relationship("Stock", back_populates="ingredient", uselist=False)
    purchases = relationship(
        "Purchase",
        back_populates="ingredient",
        order_by="Purchase.purchased_at.desc()",
    )
    recipe_items = relationship("RecipeItem", back_populates="ingredient")

    @property
    def stock_quantity(self) -> float:
        return self.stock.quantity if self.stock else 0.0

    @property
    def latest_unit_price(self) -> float | None:
        """Unit price of the most recent purchase, read with a single-row query."""
        session = object_session(self)
        if session is None:
            return None
        purchase = (
            session.query(Purchase)
            .filter(Purchase.ingredient_id == self.id)
            .order_by(Purchase.purchased_at.desc())
            .first()
        )
        return purchase.unit_price if purchase else None

    def __repr__(self):
        return f"<Ingredient(name='{self.name}')>"


class Stock(Base):
    """Current on-hand quantity of an ingredient. One row per ingredient."""

    __tablename__ = "stocks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ingredient_id = Column(
        UUID(as_uuid=True),
        ForeignKey("ingredients.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    quantity = Column(Float, nullable=False, default=0.0)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    ingredient = relationship("Ingredient", back_populates="stock")

    def __repr__(self):
        return f"<Stock(ingredient_id={self.ingredient_id}, quantity={self.quantity})>"


class Purchase(Base):
    """Immutable record of buying an ingredient. Increments stock on creation."""

    __tablename__ = "purchases"
    __table_args__ = (
        Index("idx_purchases_ingredient_date", "ingredient_id", "purchased_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    ingredient_id = Column(UUID(as_uuid=True), ForeignKey("ingredients.id"), nullable=False)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    total_cost = Column(Float, nullable=False)  # As supplied by the caller
    purchased_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)

    # Relationships
    ingredient = relationship("Ingredient", back_populates="purchases")

    def __repr__(self):
        return f"<Purchase(qty={self.quantity}, unit_price={self.unit_price})>"
