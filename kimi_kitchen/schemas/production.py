"""Pydantic schemas for Production and ProductionCost."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kimi_kitchen.schemas.recipe import RecipeSummary


class ProductionCreate(BaseModel):
    """Production request: recipe, number of reference batches, and extra costs."""

    recipe_id: UUID
    quantity: int = Field(..., gt=0, description="Multiples of the recipe's reference batch")
    labour_cost: float = Field(0.0, ge=0)
    overhead_cost: float = Field(0.0, ge=0)
    packaging_cost: float = Field(0.0, ge=0)


class ProductionCostResponse(BaseModel):
    """Cost breakdown recorded for a production run."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    ingredient_cost: float
    labour_cost: float
    overhead_cost: float
    packaging_cost: float
    total_production_cost: float


class ProductionResponse(BaseModel):
    """Production run with recipe and cost breakdown."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipe_id: UUID
    quantity: int
    labour_cost: float
    overhead_cost: float
    packaging_cost: float
    produced_at: datetime
    recipe: RecipeSummary
    production_cost: Optional[ProductionCostResponse] = None


class ProductionList(BaseModel):
    """Schema for list of production runs."""

    productions: list[ProductionResponse]
    count: int
