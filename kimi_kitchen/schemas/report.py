"""Pydantic schemas for the aggregate report."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from kimi_kitchen.schemas.order import OrderResponse
from kimi_kitchen.schemas.production import ProductionResponse


class StockReportRow(BaseModel):
    """Stock level with latest purchase price."""

    ingredient_id: UUID
    ingredient_name: str
    unit: str
    quantity: float
    latest_unit_price: Optional[float] = None
    is_low_stock: bool


class ReportSummary(BaseModel):
    """Headline totals."""

    model_config = ConfigDict(from_attributes=True)

    total_production_cost: float
    total_order_value: float
    low_stock_count: int
    total_ingredients: int


class ReportResponse(BaseModel):
    """Stock, recent production and recent orders with totals."""

    stock: list[StockReportRow]
    production: list[ProductionResponse]
    orders: list[OrderResponse]
    summary: ReportSummary
