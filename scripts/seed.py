#!/usr/bin/env python3
"""
Seed the database with the demo Kerala snack catalogue.

Usage:
    python scripts/seed.py [--database-url URL] [--create-tables] [--skip-activity]

Examples:
    python scripts/seed.py --create-tables
    DATABASE_URL=sqlite:///kimi.db python scripts/seed.py --create-tables

Demo logins (change them before going live):
    admin / admin123, manager / manager123, chef / chef123, customer / customer123
"""

import argparse
import logging

from kimi_kitchen.database import Database
from kimi_kitchen.models import Base
from kimi_kitchen.services.seed import seed_activity, seed_catalogue, seed_users


def main():
    parser = argparse.ArgumentParser(description="Seed demo data")
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    parser.add_argument("--create-tables", action="store_true", help="Create tables before seeding")
    parser.add_argument("--skip-activity", action="store_true", help="Skip sample production and orders")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    database = Database(url=args.database_url)
    database.connect()
    try:
        if args.create_tables:
            Base.metadata.create_all(database.engine)

        db = database.session()
        try:
            catalogue = seed_catalogue(db)
            print(f"Ingredients: {catalogue['ingredients']}, new recipes: {catalogue['recipes']}")
            if not args.skip_activity:
                activity = seed_activity(db)
                print(f"Production runs: {activity['productions']}, orders: {activity['orders']}")
            users = seed_users(db)
            print(f"Users created: {users}")
        finally:
            db.close()
    finally:
        database.disconnect()


if __name__ == "__main__":
    main()
