"""Test fixtures and configuration."""
import uuid
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from kimi_kitchen.models import Base
from kimi_kitchen.models.ingredient import Ingredient, Purchase, Stock
from kimi_kitchen.models.order import Order, OrderItem
from kimi_kitchen.models.recipe import Recipe, RecipeItem
from kimi_kitchen.models.user import User
from kimi_kitchen.services import auth as auth_service
from kimi_kitchen.services.roles import Role


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the minimum bcrypt cost so tests stay fast."""
    monkeypatch.setattr(auth_service, "BCRYPT_ROUNDS", 4)


@pytest.fixture(scope="function")
def engine():
    """Create an in-memory SQLite engine for testing."""
    # Use check_same_thread=False for compatibility with FastAPI TestClient
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=OFF")
        cursor.close()

    # Create all tables
    Base.metadata.create_all(engine)

    yield engine

    # Clean up
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a test database session."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


# ---------------------------------------------------------------------------
# Factory helpers
#
# Factories commit so that data survives the rollback the services perform
# when a request fails.
# ---------------------------------------------------------------------------

def make_uuid():
    return uuid.uuid4()


@pytest.fixture
def ingredient_factory(db):
    """Factory to create test ingredients."""
    def _create(name="Test Ingredient", unit="kg", **kwargs):
        ing = Ingredient(
            id=kwargs.pop("id", make_uuid()),
            name=name,
            unit=unit,
            **kwargs,
        )
        db.add(ing)
        db.commit()
        return ing
    return _create


@pytest.fixture
def stock_factory(db):
    """Factory to create the stock row for an ingredient."""
    def _create(ingredient, quantity=0.0, **kwargs):
        stock = Stock(
            id=kwargs.pop("id", make_uuid()),
            ingredient_id=ingredient.id,
            quantity=quantity,
            **kwargs,
        )
        db.add(stock)
        db.commit()
        return stock
    return _create


@pytest.fixture
def purchase_factory(db):
    """Factory to create purchases. Does not touch stock."""
    def _create(ingredient, quantity=1.0, unit_price=10.0, purchased_at=None, **kwargs):
        purchase = Purchase(
            id=kwargs.pop("id", make_uuid()),
            ingredient_id=ingredient.id,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=kwargs.pop("total_cost", quantity * unit_price),
            purchased_at=purchased_at or datetime.utcnow(),
            **kwargs,
        )
        db.add(purchase)
        db.commit()
        return purchase
    return _create


@pytest.fixture
def recipe_factory(db):
    """Factory to create test recipes."""
    def _create(name="Test Recipe", description=None, **kwargs):
        recipe = Recipe(
            id=kwargs.pop("id", make_uuid()),
            name=name,
            description=description,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
            **kwargs,
        )
        db.add(recipe)
        db.commit()
        return recipe
    return _create


@pytest.fixture
def recipe_item_factory(db):
    """Factory to add an ingredient to a recipe, appended after existing items."""
    def _create(recipe, ingredient, quantity=1.0, **kwargs):
        position = kwargs.pop(
            "position",
            db.query(RecipeItem).filter(RecipeItem.recipe_id == recipe.id).count(),
        )
        item = RecipeItem(
            id=kwargs.pop("id", make_uuid()),
            recipe_id=recipe.id,
            ingredient_id=ingredient.id,
            quantity=quantity,
            position=position,
            **kwargs,
        )
        db.add(item)
        db.commit()
        db.refresh(recipe)
        return item
    return _create


@pytest.fixture
def order_factory(db):
    """Factory to create an order with (recipe, quantity, unit_price) lines."""
    def _create(customer_name="Test Customer", status="pending", lines=(), **kwargs):
        order = Order(
            id=kwargs.pop("id", make_uuid()),
            customer_name=customer_name,
            status=status,
            order_date=kwargs.pop("order_date", datetime.utcnow()),
            **kwargs,
        )
        for recipe, quantity, unit_price in lines:
            order.items.append(OrderItem(
                recipe_id=recipe.id,
                quantity=quantity,
                unit_price=unit_price,
                total_price=quantity * unit_price,
            ))
        db.add(order)
        db.commit()
        return order
    return _create


@pytest.fixture
def user_factory(db):
    """Factory to create users. Pass password= to make the account loginable."""
    counter = {"n": 0}

    def _create(username=None, role=Role.CUSTOMER, password=None, active=True, **kwargs):
        counter["n"] += 1
        user = User(
            id=kwargs.pop("id", make_uuid()),
            username=username or f"user{counter['n']}",
            role=role,
            active=active,
            password_hash=auth_service.hash_password(password) if password else None,
            created_at=kwargs.pop("created_at", datetime.utcnow() + timedelta(seconds=counter["n"])),
            **kwargs,
        )
        db.add(user)
        db.commit()
        return user
    return _create


@pytest.fixture
def parippu_vada(ingredient_factory, stock_factory, recipe_factory, recipe_item_factory):
    """Recipe with one ingredient: 0.4 kg Chana Dal per batch, 1.0 kg in stock."""
    chana_dal = ingredient_factory(name="Chana Dal", unit="kg")
    stock = stock_factory(chana_dal, quantity=1.0)
    recipe = recipe_factory(name="Parippu Vada", description="Crispy lentil fritters")
    recipe_item_factory(recipe, chana_dal, quantity=0.4)
    return recipe, chana_dal, stock
