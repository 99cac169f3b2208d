"""Initial schema - all core tables

Revision ID: 001
Revises:
Create Date: 2025-01-08

Creates:
- users
- ingredients
- stocks
- purchases
- recipes
- recipe_items
- productions
- production_costs
- orders
- order_items
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(100)),
        sa.Column("email", sa.String(255), unique=True),
        sa.Column("password_hash", sa.String(255)),
        sa.Column("role", sa.String(20), nullable=False, server_default="CUSTOMER"),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === INGREDIENTS ===
    op.create_table(
        "ingredients",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === STOCKS (one row per ingredient) ===
    op.create_table(
        "stocks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "ingredient_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("ingredients.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === PURCHASES ===
    op.create_table(
        "purchases",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("ingredient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("unit_price", sa.Float, nullable=False),
        sa.Column("total_cost", sa.Float, nullable=False),
        sa.Column("purchased_at", sa.TIMESTAMP, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_purchases_ingredient_date", "purchases", ["ingredient_id", "purchased_at"])

    # === RECIPES ===
    op.create_table(
        "recipes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === RECIPE_ITEMS ===
    op.create_table(
        "recipe_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "recipe_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("recipes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ingredient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("ingredients.id"), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
        sa.UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_items"),
    )
    op.create_index("idx_recipe_items_recipe", "recipe_items", ["recipe_id"])

    # === PRODUCTIONS ===
    op.create_table(
        "productions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("recipe_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("labour_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("overhead_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("packaging_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("produced_at", sa.TIMESTAMP, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_productions_recipe", "productions", ["recipe_id"])

    # === PRODUCTION_COSTS (1:1 with productions) ===
    op.create_table(
        "production_costs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "production_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("productions.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("ingredient_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("labour_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("overhead_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("packaging_cost", sa.Float, nullable=False, server_default="0"),
        sa.Column("total_production_cost", sa.Float, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )

    # === ORDERS ===
    op.create_table(
        "orders",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("order_date", sa.TIMESTAMP, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP, server_default=sa.func.now()),
    )
    op.create_index("idx_orders_status", "orders", ["status"])

    # === ORDER_ITEMS ===
    op.create_table(
        "order_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "order_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("recipe_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("recipes.id"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("unit_price", sa.Float, nullable=False),
        sa.Column("total_price", sa.Float, nullable=False),
    )
    op.create_index("idx_order_items_order", "order_items", ["order_id"])
    op.create_index("idx_order_items_recipe", "order_items", ["recipe_id"])


def downgrade() -> None:
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_table("production_costs")
    op.drop_table("productions")
    op.drop_table("recipe_items")
    op.drop_table("recipes")
    op.drop_table("purchases")
    op.drop_table("stocks")
    op.drop_table("ingredients")
    op.drop_table("users")
