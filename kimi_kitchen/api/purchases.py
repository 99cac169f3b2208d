"""Purchase endpoints. Recording a purchase adds to stock."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.ingredient import Ingredient, Purchase
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.ingredient import (
    PurchaseCreate,
    PurchaseHistory,
    PurchaseList,
    PurchaseResponse,
    PurchaseSummaryResponse,
)
from kimi_kitchen.services.stock_ledger import (
    IngredientNotFoundError,
    record_purchase,
    summarize_purchases,
)

router = APIRouter(prefix="/purchases", tags=["purchases"])


@router.get("", response_model=PurchaseList)
def list_purchases(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List all purchases, newest first."""
    purchases = (
        db.query(Purchase)
        .options(joinedload(Purchase.ingredient))
        .order_by(Purchase.purchased_at.desc())
        .all()
    )
    return PurchaseList(purchases=purchases, count=len(purchases))


@router.post("", response_model=PurchaseResponse, status_code=201)
def create_purchase(
    data: PurchaseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Record a purchase and increment the ingredient's stock."""
    try:
        return record_purchase(
            db,
            data.ingredient_id,
            quantity=data.quantity,
            unit_price=data.unit_price,
            total_cost=data.total_cost,
        )
    except IngredientNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{ingredient_id}", response_model=PurchaseHistory)
def get_purchase_history(
    ingredient_id: UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Purchase history and totals for one ingredient."""
    ingredient = db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
    if not ingredient:
        raise HTTPException(status_code=404, detail="Ingredient not found")

    purchases = (
        db.query(Purchase)
        .options(joinedload(Purchase.ingredient))
        .filter(Purchase.ingredient_id == ingredient_id)
        .order_by(Purchase.purchased_at.desc())
        .all()
    )
    summary = summarize_purchases(purchases)

    return PurchaseHistory(
        ingredient=ingredient,
        purchases=purchases,
        summary=PurchaseSummaryResponse.model_validate(summary),
    )
