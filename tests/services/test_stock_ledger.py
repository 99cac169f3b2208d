"""Tests for kimi_kitchen/services/stock_ledger.py - purchases and stock."""
import logging
import uuid

import pytest
from sqlalchemy.orm import sessionmaker

from kimi_kitchen.models.ingredient import Purchase, Stock
from kimi_kitchen.services.stock_ledger import (
    IngredientNotFoundError,
    add_stock,
    record_purchase,
    summarize_purchases,
)


class TestRecordPurchase:
    def test_increments_existing_stock(self, db, ingredient_factory, stock_factory):
        ing = ingredient_factory(name="Rice Flour")
        stock_factory(ing, quantity=10)

        record_purchase(db, ing.id, quantity=5, unit_price=45, total_cost=225)

        rows = db.query(Stock).filter(Stock.ingredient_id == ing.id).all()
        assert len(rows) == 1
        assert rows[0].quantity == 15

    def test_creates_stock_row_when_missing(self, db, ingredient_factory):
        ing = ingredient_factory(name="Ghee")

        record_purchase(db, ing.id, quantity=2.5, unit_price=600, total_cost=1500)

        rows = db.query(Stock).filter(Stock.ingredient_id == ing.id).all()
        assert len(rows) == 1
        assert rows[0].quantity == 2.5

    def test_stores_purchase_as_given(self, db, ingredient_factory):
        ing = ingredient_factory(name="Jaggery")

        purchase = record_purchase(db, ing.id, quantity=3, unit_price=80, total_cost=230)

        assert purchase.id is not None
        assert purchase.total_cost == 230
        assert purchase.ingredient.name == "Jaggery"
        assert db.query(Purchase).count() == 1

    def test_mismatched_total_is_logged(self, db, ingredient_factory, caplog):
        ing = ingredient_factory(name="Jaggery")

        with caplog.at_level(logging.WARNING, logger="kimi_kitchen.services.stock_ledger"):
            record_purchase(db, ing.id, quantity=3, unit_price=80, total_cost=200)

        assert "differs from" in caplog.text

    def test_matching_total_is_not_logged(self, db, ingredient_factory, caplog):
        ing = ingredient_factory(name="Sugar")

        with caplog.at_level(logging.WARNING, logger="kimi_kitchen.services.stock_ledger"):
            record_purchase(db, ing.id, quantity=0.1, unit_price=3, total_cost=0.3)

        assert "differs from" not in caplog.text

    def test_unknown_ingredient(self, db):
        with pytest.raises(IngredientNotFoundError):
            record_purchase(db, uuid.uuid4(), quantity=1, unit_price=1, total_cost=1)
        assert db.query(Purchase).count() == 0


class TestAddStock:
    def test_repeated_adds_keep_one_row(self, db, ingredient_factory):
        ing = ingredient_factory(name="Salt", unit="g")

        add_stock(db, ing.id, 100)
        db.flush()
        add_stock(db, ing.id, 50)
        db.commit()

        rows = db.query(Stock).filter(Stock.ingredient_id == ing.id).all()
        assert len(rows) == 1
        assert rows[0].quantity == 150

    def test_increments_row_created_by_another_session(self, db, engine, ingredient_factory):
        ing = ingredient_factory(name="Jaggery")
        other = sessionmaker(bind=engine)()
        try:
            other.add(Stock(ingredient_id=ing.id, quantity=3))
            other.commit()
        finally:
            other.close()

        add_stock(db, ing.id, 2)
        db.commit()

        rows = db.query(Stock).filter(Stock.ingredient_id == ing.id).all()
        assert len(rows) == 1
        assert rows[0].quantity == 5

    def test_returns_current_quantity_for_row_in_session(self, db, ingredient_factory, stock_factory):
        ing = ingredient_factory(name="Sugar")
        stock = stock_factory(ing, quantity=10)
        assert stock.quantity == 10

        result = add_stock(db, ing.id, 5)

        assert result is stock
        assert result.quantity == 15


class TestSummarizePurchases:
    def test_summary(self, ingredient_factory, purchase_factory):
        ing = ingredient_factory(name="Coconut Oil", unit="litre")
        purchases = [
            purchase_factory(ing, quantity=2, unit_price=180),
            purchase_factory(ing, quantity=3, unit_price=200),
        ]

        summary = summarize_purchases(purchases)

        assert summary.total_purchases == 2
        assert summary.total_quantity == 5
        assert summary.total_cost == 960
        assert summary.average_unit_price == pytest.approx(192)

    def test_empty(self):
        summary = summarize_purchases([])
        assert summary.total_purchases == 0
        assert summary.average_unit_price == 0.0
