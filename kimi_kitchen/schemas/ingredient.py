"""Pydantic schemas for Ingredient, Stock and Purchase."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Ingredient Schemas
# ============================================================================


class IngredientBase(BaseModel):
    """Base ingredient fields."""

    name: str = Field(..., min_length=1, max_length=100)
    unit: str = Field(..., min_length=1, max_length=20, description="e.g. 'kg', 'g', 'litre', 'piece'")


class IngredientCreate(IngredientBase):
    """Schema for creating an ingredient."""

    pass


class IngredientSummary(IngredientBase):
    """Ingredient fields embedded in other responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID


class IngredientResponse(IngredientSummary):
    """Ingredient with current stock and latest purchase price."""

    stock_quantity: float = 0.0
    latest_unit_price: Optional[float] = None
    created_at: datetime


class IngredientList(BaseModel):
    """Schema for list of ingredients."""

    ingredients: list[IngredientResponse]
    count: int


# ============================================================================
# Stock Schemas
# ============================================================================


class StockResponse(BaseModel):
    """Current stock for one ingredient."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    ingredient_id: UUID
    quantity: float
    updated_at: Optional[datetime] = None
    ingredient: IngredientSummary


class StockList(BaseModel):
    """Schema for the stock listing."""

    stock: list[StockResponse]
    count: int


# ============================================================================
# Purchase Schemas
# ============================================================================


class PurchaseCreate(BaseModel):
    """Schema for recording a purchase."""

    ingredient_id: UUID
    quantity: float = Field(..., gt=0)
    unit_price: float = Field(..., gt=0)
    total_cost: float = Field(..., gt=0, description="Amount paid, as invoiced")


class PurchaseResponse(BaseModel):
    """Purchase record with its ingredient."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    ingredient_id: UUID
    quantity: float
    unit_price: float
    total_cost: float
    purchased_at: datetime
    ingredient: IngredientSummary


class PurchaseList(BaseModel):
    """Schema for list of purchases."""

    purchases: list[PurchaseResponse]
    count: int


class PurchaseSummaryResponse(BaseModel):
    """Aggregates over an ingredient's purchases."""

    model_config = ConfigDict(from_attributes=True)

    total_purchases: int
    total_quantity: float
    total_cost: float
    average_unit_price: float


class PurchaseHistory(BaseModel):
    """Purchase history for one ingredient, newest first."""

    ingredient: IngredientSummary
    purchases: list[PurchaseResponse]
    summary: PurchaseSummaryResponse
