"""Production endpoints. Creating a production run costs it and consumes stock."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.production import Production
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.production import ProductionCreate, ProductionList, ProductionResponse
from kimi_kitchen.services.costing import (
    InsufficientStockError,
    RecipeNotFoundError,
    create_production,
)

router = APIRouter(prefix="/production", tags=["production"])


@router.get("", response_model=ProductionList)
def list_productions(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List production runs with recipe and cost, newest first."""
    productions = (
        db.query(Production)
        .options(joinedload(Production.recipe), joinedload(Production.production_cost))
        .order_by(Production.produced_at.desc())
        .all()
    )
    return ProductionList(productions=productions, count=len(productions))


@router.post("", response_model=ProductionResponse, status_code=201)
def create_production_run(
    data: ProductionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Record a production run.

    Fails with 400 if any ingredient lacks stock; nothing is written in that case.
    """
    try:
        return create_production(
            db,
            data.recipe_id,
            data.quantity,
            labour_cost=data.labour_cost,
            overhead_cost=data.overhead_cost,
            packaging_cost=data.packaging_cost,
        )
    except RecipeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InsufficientStockError as e:
        raise HTTPException(status_code=400, detail=str(e))
