"""Recipe and RecipeItem models."""
import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Integer, Float, Text, TIMESTAMP,
    ForeignKey, UniqueConstraint, Index
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from . import Base


class Recipe(Base):
    """Snack recipe. Items describe one reference batch (usually 10 portions)."""

    __tablename__ = "recipes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = relationship(
        "RecipeItem",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="[RecipeItem.position, RecipeItem.created_at]",
    )
    productions = relationship("Production", back_populates="recipe")
    order_items = relationship("OrderItem", back_populates="recipe")

    def __repr__(self):
        return f"<Recipe(name='{self.name}')>"


class RecipeItem(Base):
    """Quantity of one ingredient needed for a recipe's reference batch."""

    __tablename__ = "recipe_items"
    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_items"),
        Index("idx_recipe_items_recipe", "recipe_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recipe_id = Column(UUID(as_uuid=True), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(UUID(as_uuid=True), ForeignKey("ingredients.id"), nullable=False)
    quantity = Column(Float, nullable=False)  # In the ingredient's unit
    position = Column(Integer, nullable=False, default=0)  # Order within the recipe
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    # Relationships
    recipe = relationship("Recipe", back_populates="items")
    ingredient = relationship("Ingredient", back_populates="recipe_items")

    def __repr__(self):
        return f"<RecipeItem(recipe_id={self.recipe_id}, ingredient_id={self.ingredient_id})>"
