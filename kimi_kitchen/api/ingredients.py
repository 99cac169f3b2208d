"""Ingredient endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.ingredient import Ingredient
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.ingredient import IngredientCreate, IngredientList, IngredientResponse

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=IngredientList)
def list_ingredients(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List ingredients with current stock and latest purchase price."""
    ingredients = (
        db.query(Ingredient)
        .options(joinedload(Ingredient.stock))
        .order_by(Ingredient.name)
        .all()
    )
    return IngredientList(ingredients=ingredients, count=len(ingredients))


@router.post("", response_model=IngredientResponse, status_code=201)
def create_ingredient(
    data: IngredientCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a new ingredient."""
    name = data.name.strip()
    unit = data.unit.strip()
    if not name or not unit:
        raise HTTPException(status_code=400, detail="Ingredient name and unit are required")

    existing = db.query(Ingredient).filter(Ingredient.name == name).first()
    if existing:
        raise HTTPException(status_code=409, detail="Ingredient with this name already exists")

    ingredient = Ingredient(name=name, unit=unit)
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient
