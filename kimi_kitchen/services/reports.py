"""Aggregate inventory, production and order report."""
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.config import get_settings
from kimi_kitchen.models.ingredient import Ingredient, Stock
from kimi_kitchen.models.order import Order, OrderItem
from kimi_kitchen.models.production import Production, ProductionCost

RECENT_LIMIT = 10


def get_stock_rows(db: Session) -> list[Stock]:
    """All stock rows with their ingredient, ordered by ingredient name."""
    return (
        db.query(Stock)
        .join(Ingredient, Stock.ingredient_id == Ingredient.id)
        .options(joinedload(Stock.ingredient))
        .order_by(Ingredient.name)
        .all()
    )


def is_low_stock(quantity: float, threshold: float | None = None) -> bool:
    if threshold is None:
        threshold = get_settings().LOW_STOCK_THRESHOLD
    return quantity < threshold


def build_report(db: Session) -> dict:
    """Collect stock, recent production and orders, and summary totals."""
    stock_rows = get_stock_rows(db)

    productions = (
        db.query(Production)
        .options(joinedload(Production.recipe), joinedload(Production.production_cost))
        .order_by(Production.produced_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )

    orders = (
        db.query(Order)
        .options(joinedload(Order.items).joinedload(OrderItem.recipe))
        .order_by(Order.order_date.desc())
        .limit(RECENT_LIMIT)
        .all()
    )

    total_production_cost = db.query(func.sum(ProductionCost.total_production_cost)).scalar() or 0.0
    total_order_value = db.query(func.sum(OrderItem.total_price)).scalar() or 0.0
    low_stock_count = sum(1 for row in stock_rows if is_low_stock(row.quantity))

    return {
        "stock": stock_rows,
        "production": productions,
        "orders": orders,
        "summary": {
            "total_production_cost": total_production_cost,
            "total_order_value": total_order_value,
            "low_stock_count": low_stock_count,
            "total_ingredients": len(stock_rows),
        },
    }
