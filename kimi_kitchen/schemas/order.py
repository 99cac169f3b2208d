"""Pydantic schemas for Order and OrderItem."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kimi_kitchen.schemas.recipe import RecipeSummary

OrderStatus = Literal["pending", "processing", "completed", "delivered", "cancelled"]


class OrderItemCreate(BaseModel):
    """One line on a new order."""

    recipe_id: UUID
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., gt=0)


class OrderCreate(BaseModel):
    """Schema for creating an order."""

    customer_name: str = Field(..., min_length=1, max_length=200)
    status: OrderStatus = "pending"
    items: list[OrderItemCreate]


class OrderStatusUpdate(BaseModel):
    """Schema for changing an order's status."""

    status: OrderStatus


class OrderItemResponse(BaseModel):
    """Order line with recipe info."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipe_id: UUID
    quantity: int
    unit_price: float
    total_price: float
    recipe: RecipeSummary


class OrderResponse(BaseModel):
    """Order with its line items."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_name: str
    status: str
    order_date: datetime
    total_amount: float
    items: list[OrderItemResponse] = []


class OrderList(BaseModel):
    """Schema for list of orders."""

    orders: list[OrderResponse]
    count: int
