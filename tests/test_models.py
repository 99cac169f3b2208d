"""Tests for model properties."""
from datetime import datetime, timedelta

from sqlalchemy import inspect

from kimi_kitchen.models.ingredient import Ingredient


class TestLatestUnitPrice:
    def test_most_recent_purchase(self, db, ingredient_factory, purchase_factory):
        ing = ingredient_factory(name="Cardamom", unit="g")
        now = datetime.utcnow()
        purchase_factory(ing, unit_price=6, purchased_at=now - timedelta(days=30))
        purchase_factory(ing, unit_price=8, purchased_at=now)
        purchase_factory(ing, unit_price=7, purchased_at=now - timedelta(days=3))
        db.expire_all()

        ingredient = db.query(Ingredient).filter(Ingredient.id == ing.id).one()

        assert ingredient.latest_unit_price == 8
        assert "purchases" in inspect(ingredient).unloaded

    def test_never_purchased(self, db, ingredient_factory):
        ing = ingredient_factory(name="Water", unit="ml")
        assert ing.latest_unit_price is None

    def test_detached_ingredient(self):
        assert Ingredient(name="Salt", unit="g").latest_unit_price is None


class TestStockQuantity:
    def test_without_stock_row(self, ingredient_factory):
        assert ingredient_factory(name="Ghee").stock_quantity == 0.0

    def test_with_stock_row(self, ingredient_factory, stock_factory):
        ing = ingredient_factory(name="Ghee")
        stock_factory(ing, quantity=3)
        assert ing.stock_quantity == 3
