"""Pydantic schemas for Recipe and RecipeItem."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kimi_kitchen.schemas.ingredient import IngredientSummary


class RecipeItemCreate(BaseModel):
    """Schema for adding an ingredient to a recipe."""

    ingredient_id: UUID
    quantity: float = Field(..., gt=0, description="Amount per reference batch, in the ingredient's unit")


class RecipeItemResponse(BaseModel):
    """Recipe item with ingredient details."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipe_id: UUID
    ingredient_id: UUID
    quantity: float
    ingredient: IngredientSummary


class RecipeBase(BaseModel):
    """Base recipe fields."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class RecipeCreate(RecipeBase):
    """Schema for creating a recipe."""

    pass


class RecipeUpdate(RecipeBase):
    """Schema for replacing a recipe's name and description."""

    pass


class RecipeSummary(BaseModel):
    """Minimal recipe info embedded in other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class RecipeResponse(RecipeBase):
    """Full recipe response with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
    items: list[RecipeItemResponse] = []


class RecipeList(BaseModel):
    """Schema for list of recipes."""

    recipes: list[RecipeResponse]
    count: int
