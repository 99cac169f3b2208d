"""Demo catalogue of Kerala snacks: ingredients, recipes, stock, purchases, orders, users.

Seeding is idempotent for named entities (ingredients, recipes, users): rows
that already exist are reused rather than duplicated.
"""
import logging

from sqlalchemy.orm import Session

from kimi_kitchen.models.ingredient import Ingredient, Purchase, Stock
from kimi_kitchen.models.order import Order, OrderItem
from kimi_kitchen.models.recipe import Recipe, RecipeItem
from kimi_kitchen.models.user import User
from kimi_kitchen.services.auth import hash_password
from kimi_kitchen.services.costing import InsufficientStockError, create_production
from kimi_kitchen.services.roles import Role

logger = logging.getLogger(__name__)

INGREDIENTS = [
    ("Rice Flour", "kg"),
    ("Raw Rice", "kg"),
    ("Parboiled Rice", "kg"),
    ("Fresh Coconut", "piece"),
    ("Coconut Oil", "litre"),
    ("Coconut Milk", "ml"),
    ("Jaggery", "kg"),
    ("Sugar", "kg"),
    ("Cardamom", "g"),
    ("Cumin Seeds", "g"),
    ("Black Sesame Seeds", "g"),
    ("Salt", "g"),
    ("Urad Dal", "kg"),
    ("Chana Dal", "kg"),
    ("Banana Leaves", "piece"),
    ("Ghee", "kg"),
    ("Water", "ml"),
]

RECIPES = [
    ("Unniyappam", "Traditional Kerala sweet rice fritters made with jaggery and banana"),
    ("Achappam", "Crispy rose-shaped cookies made with rice flour and coconut milk"),
    ("Neyyappam", "Soft and sweet rice pancakes fried in ghee"),
    ("Parippu Vada", "Crispy lentil fritters, a popular tea-time snack"),
    ("Sukhiyan", "Sweet bondas made with green gram and jaggery"),
    ("Pazham Pori", "Ripe banana fritters coated in rice flour batter"),
]

# Per reference batch of 10 pieces
RECIPE_ITEMS = {
    "Unniyappam": [
        ("Rice Flour", 1), ("Jaggery", 0.5), ("Coconut Oil", 0.3),
        ("Cardamom", 10), ("Fresh Coconut", 1),
    ],
    "Achappam": [
        ("Rice Flour", 1), ("Coconut Milk", 200), ("Sugar", 0.2),
        ("Cumin Seeds", 5), ("Coconut Oil", 0.5),
    ],
    "Neyyappam": [
        ("Raw Rice", 1), ("Jaggery", 0.5), ("Ghee", 0.2),
        ("Cardamom", 8), ("Fresh Coconut", 1),
    ],
    "Parippu Vada": [
        ("Chana Dal", 1), ("Salt", 20), ("Coconut Oil", 0.3), ("Cumin Seeds", 10),
    ],
    "Sukhiyan": [
        ("Urad Dal", 0.5), ("Jaggery", 0.3), ("Coconut Oil", 0.2), ("Cardamom", 5),
    ],
    "Pazham Pori": [
        ("Rice Flour", 0.5), ("Sugar", 0.1), ("Coconut Oil", 0.3), ("Salt", 5),
    ],
}

INITIAL_STOCK = {
    "Rice Flour": 10,
    "Raw Rice": 25,
    "Parboiled Rice": 15,
    "Fresh Coconut": 50,
    "Coconut Oil": 5,
    "Coconut Milk": 2000,
    "Jaggery": 8,
    "Sugar": 5,
    "Cardamom": 500,
    "Cumin Seeds": 300,
    "Black Sesame Seeds": 200,
    "Salt": 1000,
    "Urad Dal": 5,
    "Chana Dal": 8,
    "Banana Leaves": 100,
    "Ghee": 3,
}

# (ingredient, quantity, unit_price, total_cost)
PURCHASES = [
    ("Rice Flour", 5, 45, 225),
    ("Jaggery", 3, 80, 240),
    ("Coconut Oil", 2, 180, 360),
    ("Fresh Coconut", 20, 25, 500),
    ("Cardamom", 100, 8, 800),
]

# (recipe, batches, labour, overhead, packaging)
PRODUCTION_RUNS = [
    ("Unniyappam", 2, 200, 50, 30),
    ("Achappam", 1, 150, 40, 25),
    ("Parippu Vada", 2, 180, 45, 20),
]

ORDERS = [
    ("Anand Sweets", "completed"),
    ("Kerala Bakery", "processing"),
    ("Tea Shop Junction", "pending"),
]

# (recipe, quantity, unit_price) on every demo order
ORDER_LINES = [
    ("Unniyappam", 20, 15),
    ("Parippu Vada", 30, 12),
]

# (username, name, email, password, role)
USERS = [
    ("admin", "System Administrator", "admin@kimikitchen.com", "admin123", Role.ADMIN),
    ("manager", "Kitchen Manager", "manager@kimikitchen.com", "manager123", Role.MANAGER),
    ("chef", "Head Chef", "chef@kimikitchen.com", "chef123", Role.CHEF),
    ("customer", "Sample Customer", "customer@kimikitchen.com", "customer123", Role.CUSTOMER),
]


def _get_or_create_ingredient(db: Session, name: str, unit: str) -> Ingredient:
    ingredient = db.query(Ingredient).filter(Ingredient.name == name).first()
    if not ingredient:
        ingredient = Ingredient(name=name, unit=unit)
        db.add(ingredient)
        db.flush()
    return ingredient


def _get_or_create_recipe(db: Session, name: str, description: str) -> tuple[Recipe, bool]:
    recipe = db.query(Recipe).filter(Recipe.name == name).first()
    if recipe:
        return recipe, False
    recipe = Recipe(name=name, description=description)
    db.add(recipe)
    db.flush()
    return recipe, True


def seed_catalogue(db: Session) -> dict[str, int]:
    """Insert ingredients, recipes with items, stock, and sample purchases."""
    ingredients = {name: _get_or_create_ingredient(db, name, unit) for name, unit in INGREDIENTS}

    new_recipes = 0
    recipes = {}
    for name, description in RECIPES:
        recipe, created = _get_or_create_recipe(db, name, description)
        recipes[name] = recipe
        if created:
            new_recipes += 1
            for position, (ingredient_name, quantity) in enumerate(RECIPE_ITEMS[name]):
                db.add(RecipeItem(
                    recipe_id=recipe.id,
                    ingredient_id=ingredients[ingredient_name].id,
                    quantity=quantity,
                    position=position,
                ))

    # Stock is reset to the initial levels
    db.query(Stock).delete()
    for ingredient_name, quantity in INITIAL_STOCK.items():
        db.add(Stock(ingredient_id=ingredients[ingredient_name].id, quantity=quantity))

    for ingredient_name, quantity, unit_price, total_cost in PURCHASES:
        db.add(Purchase(
            ingredient_id=ingredients[ingredient_name].id,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=total_cost,
        ))

    db.commit()
    logger.info(f"Seeded {len(ingredients)} ingredients and {new_recipes} new recipes")
    return {"ingredients": len(ingredients), "recipes": new_recipes}


def seed_activity(db: Session) -> dict[str, int]:
    """Run sample production through the costing engine and add demo orders."""
    recipes = {r.name: r for r in db.query(Recipe).all()}

    produced = 0
    for recipe_name, batches, labour, overhead, packaging in PRODUCTION_RUNS:
        try:
            create_production(
                db,
                recipes[recipe_name].id,
                batches,
                labour_cost=labour,
                overhead_cost=overhead,
                packaging_cost=packaging,
            )
            produced += 1
        except InsufficientStockError as e:
            logger.warning(f"Skipped sample production of {recipe_name}: {e}")

    for customer_name, status in ORDERS:
        order = Order(customer_name=customer_name, status=status)
        for recipe_name, quantity, unit_price in ORDER_LINES:
            order.items.append(OrderItem(
                recipe_id=recipes[recipe_name].id,
                quantity=quantity,
                unit_price=unit_price,
                total_price=quantity * unit_price,
            ))
        db.add(order)
    db.commit()

    logger.info(f"Seeded {produced} production runs and {len(ORDERS)} orders")
    return {"productions": produced, "orders": len(ORDERS)}


def seed_users(db: Session) -> int:
    """Create one demo account per role. Existing usernames are left alone."""
    created = 0
    for username, name, email, password, role in USERS:
        if db.query(User).filter(User.username == username).first():
            continue
        db.add(User(
            username=username,
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            active=True,
        ))
        created += 1
    db.commit()
    logger.info(f"Created {created} demo users")
    return created
