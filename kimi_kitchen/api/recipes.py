"""Recipe and recipe item endpoints."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from kimi_kitchen.api.deps import get_current_user
from kimi_kitchen.database import get_db
from kimi_kitchen.models.ingredient import Ingredient
from kimi_kitchen.models.order import OrderItem
from kimi_kitchen.models.production import Production
from kimi_kitchen.models.recipe import Recipe, RecipeItem
from kimi_kitchen.models.user import User
from kimi_kitchen.schemas.recipe import (
    RecipeCreate,
    RecipeItemCreate,
    RecipeItemResponse,
    RecipeList,
    RecipeResponse,
    RecipeUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _get_recipe_or_404(db: Session, recipe_id: UUID) -> Recipe:
    recipe = (
        db.query(Recipe)
        .options(joinedload(Recipe.items).joinedload(RecipeItem.ingredient))
        .filter(Recipe.id == recipe_id)
        .first()
    )
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


# ============================================================================
# Recipe Endpoints
# ============================================================================


@router.get("", response_model=RecipeList)
def list_recipes(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List all recipes with their ingredients."""
    recipes = (
        db.query(Recipe)
        .options(joinedload(Recipe.items).joinedload(RecipeItem.ingredient))
        .order_by(Recipe.name)
        .all()
    )
    return RecipeList(recipes=recipes, count=len(recipes))


@router.post("", response_model=RecipeResponse, status_code=201)
def create_recipe(
    data: RecipeCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a new recipe. Ingredients are added through /items."""
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Recipe name is required")
    if db.query(Recipe).filter(Recipe.name == name).first():
        raise HTTPException(status_code=409, detail="Recipe name already exists")

    recipe = Recipe(name=name, description=data.description)
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
):
    """Get a single recipe with its ingredients. Does not require sign-in."""
    return _get_recipe_or_404(db, recipe_id)


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: UUID,
    data: RecipeUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Replace a recipe's name and description."""
    name = data.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Recipe name is required")

    recipe = _get_recipe_or_404(db, recipe_id)

    conflict = (
        db.query(Recipe)
        .filter(Recipe.name == name, Recipe.id != recipe_id)
        .first()
    )
    if conflict:
        raise HTTPException(status_code=409, detail="Recipe name already exists")

    recipe.name = name
    recipe.description = data.description.strip() if data.description and data.description.strip() else None
    db.commit()
    db.refresh(recipe)
    return recipe


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a recipe that has never been produced or ordered."""
    recipe = _get_recipe_or_404(db, recipe_id)

    production_count = (
        db.query(func.count(Production.id)).filter(Production.recipe_id == recipe_id).scalar()
    )
    order_count = (
        db.query(func.count(OrderItem.id)).filter(OrderItem.recipe_id == recipe_id).scalar()
    )
    if production_count or order_count:
        raise HTTPException(
            status_code=409,
            detail="Cannot delete recipe that is used in production or orders",
        )

    name = recipe.name
    db.delete(recipe)
    db.commit()
    logger.info(f"Deleted recipe {name}")
    return {"message": "Recipe deleted successfully"}


# ============================================================================
# Recipe Item Endpoints
# ============================================================================


@router.post("/{recipe_id}/items", response_model=RecipeItemResponse, status_code=201)
def add_recipe_item(
    recipe_id: UUID,
    data: RecipeItemCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Add an ingredient to a recipe's bill of materials."""
    recipe = _get_recipe_or_404(db, recipe_id)

    ingredient = db.query(Ingredient).filter(Ingredient.id == data.ingredient_id).first()
    if not ingredient:
        raise HTTPException(status_code=404, detail="Ingredient not found")

    if any(item.ingredient_id == data.ingredient_id for item in recipe.items):
        raise HTTPException(status_code=409, detail="Ingredient already exists in this recipe")

    next_position = max((item.position for item in recipe.items), default=-1) + 1
    item = RecipeItem(
        recipe_id=recipe.id,
        ingredient_id=ingredient.id,
        quantity=data.quantity,
        position=next_position,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{recipe_id}/items")
def remove_recipe_item(
    recipe_id: UUID,
    item_id: UUID = Query(..., description="ID of the recipe item to remove"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Remove an ingredient from a recipe."""
    _get_recipe_or_404(db, recipe_id)

    item = db.query(RecipeItem).filter(RecipeItem.id == item_id).first()
    if not item or item.recipe_id != recipe_id:
        raise HTTPException(status_code=404, detail="Recipe item not found")

    db.delete(item)
    db.commit()
    return {"message": "Recipe item deleted successfully"}
