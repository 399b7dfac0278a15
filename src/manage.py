"""Storefront database management CLI.

Provides commands to create, drop and seed the relational schema shared by
all contexts. The target database comes from ``STOREFRONT_DATABASE_URL``.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Insert sample users and products
"""

import argparse
import sys
from decimal import Decimal

SAMPLE_PRODUCTS = [
    ("Classic Tee", "Heavyweight cotton t-shirt", Decimal("19.99"), 120, "apparel"),
    ("Canvas Tote", "Everyday carry bag", Decimal("14.50"), 60, "accessories"),
    ("Ceramic Mug", "350ml stoneware mug", Decimal("9.00"), 200, "home"),
    ("Limited Print", "Signed print, numbered run", Decimal("75.00"), 3, "art"),
]


def _database():
    from shared.config import get_settings
    from shared.database import Database

    return Database.from_settings(get_settings())


def setup_database():
    """Create every table that does not exist yet."""
    from shared.database import setup_db

    database = _database()
    print(f"Creating schema on {database.dialect}...")
    setup_db(database)
    database.dispose()
    print("Done.")


def drop_database():
    """Drop every table."""
    from shared.database import drop_db

    database = _database()
    print(f"Dropping schema on {database.dialect}...")
    drop_db(database)
    database.dispose()
    print("Done.")


def seed_database():
    """Insert a user, an admin and a handful of products."""
    from catalogue.products import ProductData, create_product
    from identity.users import Role, create_user

    database = _database()
    with database.transaction() as conn:
        admin_id = create_user(conn, "admin", "admin@storefront.local", Role.ADMIN)
        user_id = create_user(conn, "shopper", "shopper@storefront.local")
        for name, description, price, stock, category in SAMPLE_PRODUCTS:
            create_product(
                conn,
                ProductData(
                    name=name,
                    description=description,
                    price=price,
                    stock_quantity=stock,
                    category=category,
                ),
            )
    database.dispose()

    print(f"Seeded {len(SAMPLE_PRODUCTS)} products.")
    print("Add tokens for the seeded users to STOREFRONT_AUTH_TOKENS, e.g.:")
    print(f'  STOREFRONT_AUTH_TOKENS=\'{{"dev-admin": "{admin_id}:admin", "dev-user": "{user_id}:user"}}\'')


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Insert sample users and products")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
