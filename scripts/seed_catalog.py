#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and loads a fixed demo set of supermarket
categories and products, a few of them at or below their reorder level.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --no-clear
"""

import argparse
import asyncio

from backoffice.catalog.service import CatalogService
from backoffice.infrastructure.database import async_session_factory, create_tables


async def seed(clear: bool = True) -> dict:
    """Seed the demo catalog.

    Args:
        clear: Whether to clear existing products and categories.

    Returns:
        Seeding result.
    """
    async with async_session_factory() as session:
        service = CatalogService(session)
        return await service.seed_catalog(clear_existing=clear)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the back-office product catalog",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products and categories before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Back-Office Catalog Seeder")
    print("=" * 60)
    print(f"Clear existing: {not args.no_clear}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    print("Seeding catalog...")
    try:
        result = await seed(clear=not args.no_clear)
    except Exception as e:
        print(f"  ✗ Error: {e}")
        raise

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Low stock: {result['low_stock']}")
    print()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
