"""Production and ProductionCost models."""
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, Float, TIMESTAMP, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from . import Base


class Production(Base):
    """One production run of a recipe. Never updated once created."""

    __tablename__ = "productions"
    __table_args__ = (
        Index("idx_productions_recipe", "recipe_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recipe_id = Column(UUID(as_uuid=True), ForeignKey("recipes.id"), nullable=False)
    quantity = Column(Integer, nullable=False)  # Multiples of the reference batch
    labour_cost = Column(Float, nullable=False, default=0.0)
    overhead_cost = Column(Float, nullable=False, default=0.0)
    packaging_cost = Column(Float, nullable=False, default=0.0)
    produced_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow)

    # Relationships
    recipe = relationship("Recipe", back_populates="productions")
    production_cost = relationship(
        "ProductionCost",
        back_populates="production",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Production(recipe_id={self.recipe_id}, quantity={self.quantity})>"


class ProductionCost(Base):
    """Cost breakdown computed when a production run is recorded."""

    __tablename__ = "production_costs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    production_id = Column(
        UUID(as_uuid=True),
        ForeignKey("productions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    ingredient_cost = Column(Float, nullable=False, default=0.0)
    labour_cost = Column(Float, nullable=False, default=0.0)
    overhead_cost = Column(Float, nullable=False, default=0.0)
    packaging_cost = Column(Float, nullable=False, default=0.0)
    total_production_cost = Column(Float, nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    # Relationships
    production = relationship("Production", back_populates="production_cost")

    def __repr__(self):
        return f"<ProductionCost(total={self.total_production_cost})>"
