"""
Create the products table ahead of the first deployment, optionally with demo rows.

    python scripts/init_db.py
    python scripts/init_db.py --seed --placeholder-image https://example.com/placeholder.png
"""
import argparse
import sys
import os

# Add parent directory to path so we can import from root
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger
from sqlalchemy import func

from config import Settings, configure_logging
from database import Database
from exceptions import APIError
from models import Product

DEMO_PRODUCTS = [
    {"name": "Ceramic Mug", "category": "Kitchen", "price": "12.50", "badge": "New"},
    {"name": "Linen Apron", "category": "Kitchen", "price": "24.00", "description": "Stonewashed linen, one size"},
    {"name": "Oak Cutting Board", "category": "Kitchen", "price": "39.90", "badge": "Best seller"},
]


def init_database(database: Database, seed: bool = False, placeholder_image: str = None) -> int:
    """Create the schema and return the number of demo rows inserted."""
    database.ensure_schema()

    if not seed:
        return 0
    if not placeholder_image:
        raise ValueError("--placeholder-image is required with --seed")

    db = database.SessionLocal()
    try:
        if db.query(func.count(Product.id)).scalar():
            logger.info("Products already present, skipping seed data")
            return 0
        for data in DEMO_PRODUCTS:
            db.add(Product(image=placeholder_image, **data))
        db.commit()
        logger.info("Seeded {} demo products", len(DEMO_PRODUCTS))
        return len(DEMO_PRODUCTS)
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="insert demo products when the table is empty")
    parser.add_argument("--placeholder-image", help="image URL used by the demo products")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings)

    try:
        database = Database.from_settings(settings)
        init_database(database, seed=args.seed, placeholder_image=args.placeholder_image)
    except (APIError, ValueError) as e:
        logger.error("✗ Error initializing database: {}", getattr(e, "error", e))
        return 1

    logger.info("✓ Database ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
