"""Production costing: turns a production request into a costed, stock-adjusting run.

The whole sequence runs in one transaction:

1. Load the recipe's bill of materials, locking each ingredient's stock row.
2. Check every ingredient has enough stock (first shortfall wins).
3. Price each ingredient at its most recent purchase (0 if never purchased).
4. Write Production + ProductionCost and decrement stock.

A failure at any step rolls back every write, so a Production never exists
without its cost record and stock adjustments.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.models.ingredient import Ingredient, Purchase, Stock
from kimi_kitchen.models.production import Production, ProductionCost
from kimi_kitchen.models.recipe import Recipe, RecipeItem

logger = logging.getLogger(__name__)


class RecipeNotFoundError(ValueError):
    """The requested recipe does not exist."""

    def __init__(self, recipe_id: UUID):
        self.recipe_id = recipe_id
        super().__init__("Recipe not found")


class InsufficientStockError(ValueError):
    """An ingredient's stock cannot cover the requested production."""

    def __init__(self, ingredient_name: str, required: float, available: float):
        self.ingredient_name = ingredient_name
        self.required = required
        self.available = available
        super().__init__(f"Insufficient stock for {ingredient_name}")


@dataclass
class IngredientRequirement:
    """What one recipe item needs for a production run."""

    recipe_item: RecipeItem
    ingredient: Ingredient
    stock: Optional[Stock]
    required: float
    unit_price: float

    @property
    def available(self) -> float:
        return self.stock.quantity if self.stock else 0.0

    @property
    def cost(self) -> float:
        return self.required * self.unit_price


def get_latest_unit_price(db: Session, ingredient_id: UUID) -> float:
    """Unit price of the most recent purchase, or 0 if never purchased."""
    purchase = (
        db.query(Purchase)
        .filter(Purchase.ingredient_id == ingredient_id)
        .order_by(Purchase.purchased_at.desc())
        .first()
    )
    return purchase.unit_price if purchase else 0.0


def resolve_requirements(
    db: Session,
    recipe: Recipe,
    quantity: int,
    lock: bool = True,
) -> list[IngredientRequirement]:
    """Scale a recipe's items by quantity and attach stock and latest price.

    With lock=True the stock rows are selected FOR UPDATE so no other
    transaction can change them until this one ends. Stock rows already in
    the session are overwritten with the freshly read quantities.
    """
    ingredient_ids = [item.ingredient_id for item in recipe.items]
    stock_query = (
        db.query(Stock)
        .filter(Stock.ingredient_id.in_(ingredient_ids))
        .populate_existing()
    )
    if lock:
        stock_query = stock_query.with_for_update()
    stock_by_ingredient = {stock.ingredient_id: stock for stock in stock_query.all()}

    requirements = []
    for item in recipe.items:
        requirements.append(IngredientRequirement(
            recipe_item=item,
            ingredient=item.ingredient,
            stock=stock_by_ingredient.get(item.ingredient_id),
            required=item.quantity * quantity,
            unit_price=get_latest_unit_price(db, item.ingredient_id),
        ))
    return requirements


def check_stock(requirements: list[IngredientRequirement]) -> None:
    """Raise InsufficientStockError for the first item that cannot be covered."""
    for req in requirements:
        if req.required > req.available:
            raise InsufficientStockError(req.ingredient.name, req.required, req.available)


def calculate_ingredient_cost(requirements: list[IngredientRequirement]) -> float:
    """Sum of required quantity times latest unit price over all items."""
    return sum((req.cost for req in requirements), 0.0)


def create_production(
    db: Session,
    recipe_id: UUID,
    quantity: int,
    labour_cost: float = 0.0,
    overhead_cost: float = 0.0,
    packaging_cost: float = 0.0,
) -> Production:
    """Record a production run of recipe_id, cost it, and consume its stock.

    Raises:
        RecipeNotFoundError: recipe_id does not exist.
        InsufficientStockError: some ingredient lacks stock. Nothing is written.
    """
    if quantity <= 0:
        raise ValueError("Quantity must be a positive integer")

    try:
        recipe = (
            db.query(Recipe)
            .options(joinedload(Recipe.items).joinedload(RecipeItem.ingredient))
            .filter(Recipe.id == recipe_id)
            .first()
        )
        if not recipe:
            raise RecipeNotFoundError(recipe_id)

        requirements = resolve_requirements(db, recipe, quantity)
        check_stock(requirements)

        ingredient_cost = calculate_ingredient_cost(requirements)
        total_cost = ingredient_cost + labour_cost + overhead_cost + packaging_cost

        production = Production(
            recipe_id=recipe.id,
            quantity=quantity,
            labour_cost=labour_cost,
            overhead_cost=overhead_cost,
            packaging_cost=packaging_cost,
        )
        production.production_cost = ProductionCost(
            ingredient_cost=ingredient_cost,
            labour_cost=labour_cost,
            overhead_cost=overhead_cost,
            packaging_cost=packaging_cost,
            total_production_cost=total_cost,
        )
        db.add(production)

        for req in requirements:
            if req.stock is not None:
                req.stock.quantity = req.stock.quantity - req.required

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(production)
    logger.info(
        f"Produced {quantity} batch(es) of {recipe.name}: "
        f"ingredients {ingredient_cost:.2f}, total {total_cost:.2f}"
    )
    return production
