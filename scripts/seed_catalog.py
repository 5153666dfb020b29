#!/usr/bin/env python3
"""Seed product catalog script.

Deletes every product and inserts the bundled dataset.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --reset-only
    python scripts/seed_catalog.py --no-create-tables
"""

import argparse
import asyncio

from storefront.catalog.service import CatalogService
from storefront.infrastructure.database import async_session_factory, create_tables, engine
from storefront.infrastructure.logging import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Reset and seed the product catalog",
    )
    parser.add_argument(
        "--reset-only",
        action="store_true",
        help="Delete every product without inserting the dataset",
    )
    parser.add_argument(
        "--no-create-tables",
        action="store_true",
        help="Don't create missing tables before seeding",
    )

    args = parser.parse_args()
    configure_logging()

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)

    if not args.no_create_tables:
        print("Creating database tables...")
        await create_tables()
        print("Tables ready.")
        print()

    service = CatalogService(async_session_factory)

    try:
        if args.reset_only:
            deleted = await service.reset_catalog()
            print(f"  ✓ Deleted: {deleted} products")
        else:
            created = await service.seed_catalog()
            print(f"  ✓ Created: {created} products")
    except Exception as e:
        print(f"  ✗ Error: {e}")
        raise
    finally:
        await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
