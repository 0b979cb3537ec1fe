"""Seed shared categories (no owner, visible to every user).

    python -m app.seed                  # default set
    python -m app.seed Rent Utilities   # specific names
"""
import argparse

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import Database
from app.services.category_store import DEFAULT_SHARED_CATEGORIES, CategoryStore


def seed_shared_categories(database: Database, names=None) -> int:
    database.create_all()
    return CategoryStore(database).seed_shared(names or DEFAULT_SHARED_CATEGORIES)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed shared expense categories.")
    parser.add_argument("names", nargs="*", help="category names (defaults to the built-in set)")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    database = Database.from_settings(settings)
    try:
        created = seed_shared_categories(database, args.names)
    finally:
        database.dispose()
    print(f"Created {created} shared categories.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
