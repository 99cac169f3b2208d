"""Stock ledger: purchases increase stock, one row per ingredient."""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from kimi_kitchen.config import get_settings
from kimi_kitchen.models.ingredient import Ingredient, Purchase, Stock

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class IngredientNotFoundError(ValueError):
    """The referenced ingredient does not exist."""

    def __init__(self, ingredient_id: UUID):
        self.ingredient_id = ingredient_id
        super().__init__("Ingredient not found")


@dataclass
class PurchaseSummary:
    """Aggregates over an ingredient's purchase history."""

    total_purchases: int
    total_quantity: float
    total_cost: float
    average_unit_price: float


def add_stock(db: Session, ingredient_id: UUID, quantity: float) -> Stock:
    """Increment the ingredient's stock row, creating it if missing.

    Runs as a single INSERT ... ON CONFLICT DO UPDATE, so concurrent first
    purchases of an ingredient add up instead of colliding on the unique
    ingredient_id. Does not commit; the caller owns the transaction.
    """
    insert = UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is None:
        return _add_stock_locked(db, ingredient_id, quantity)

    now = datetime.utcnow()
    stocks = Stock.__table__
    stmt = insert(stocks).values(
        id=uuid.uuid4(),
        ingredient_id=ingredient_id,
        quantity=quantity,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[stocks.c.ingredient_id],
        set_={"quantity": stocks.c.quantity + stmt.excluded.quantity, "updated_at": now},
    )
    db.execute(stmt)

    return (
        db.query(Stock)
        .filter(Stock.ingredient_id == ingredient_id)
        .populate_existing()
        .one()
    )


def _add_stock_locked(db: Session, ingredient_id: UUID, quantity: float) -> Stock:
    stock = (
        db.query(Stock)
        .filter(Stock.ingredient_id == ingredient_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if stock:
        stock.quantity = stock.quantity + quantity
    else:
        stock = Stock(ingredient_id=ingredient_id, quantity=quantity)
        db.add(stock)
    return stock


def record_purchase(
    db: Session,
    ingredient_id: UUID,
    quantity: float,
    unit_price: float,
    total_cost: float,
) -> Purchase:
    """Store a purchase and add its quantity to stock in one transaction.

    total_cost is kept as supplied. A mismatch with quantity * unit_price
    beyond PURCHASE_TOTAL_TOLERANCE is logged, not rejected, since callers
    may record discounts or rounded totals.
    """
    ingredient = db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
    if not ingredient:
        raise IngredientNotFoundError(ingredient_id)

    expected_total = quantity * unit_price
    tolerance = get_settings().PURCHASE_TOTAL_TOLERANCE
    if abs(expected_total - total_cost) > tolerance:
        logger.warning(
            f"Purchase of {ingredient.name}: total_cost {total_cost} differs from "
            f"quantity * unit_price ({expected_total})"
        )

    try:
        purchase = Purchase(
            ingredient_id=ingredient_id,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=total_cost,
        )
        db.add(purchase)
        add_stock(db, ingredient_id, quantity)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(purchase)
    logger.info(f"Recorded purchase of {quantity} {ingredient.unit} {ingredient.name} at {unit_price}")
    return purchase


def summarize_purchases(purchases: list[Purchase]) -> PurchaseSummary:
    """Totals and average unit price (total cost / total quantity)."""
    total_quantity = sum((p.quantity for p in purchases), 0.0)
    total_cost = sum((p.total_cost for p in purchases), 0.0)
    average = total_cost / total_quantity if total_quantity > 0 else 0.0
    return PurchaseSummary(
        total_purchases=len(purchases),
        total_quantity=total_quantity,
        total_cost=total_cost,
        average_unit_price=average,
    )
