"""SQLAlchemy models for kimi-kitchen."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models to register them with Base.metadata
from .ingredient import Ingredient, Stock, Purchase
from .recipe import Recipe, RecipeItem
from .production import Production, ProductionCost
from .order import Order, OrderItem
from .user import User

__all__ = [
    "Base",
    "Ingredient",
    "Stock",
    "Purchase",
    "Recipe",
    "RecipeItem",
    "Production",
    "ProductionCost",
    "Order",
    "OrderItem",
    "User",
]
