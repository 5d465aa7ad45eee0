"""Catalog repositories for database operations.

Provides the statements the catalog issues against storage: ordered
listings, the product/category join, single-row writes and counts.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.catalog.models import Category, Product


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_all(self) -> Sequence[Category]:
        """Get all categories ordered by name.

        Returns:
            Categories sorted by name ascending.
        """
        result = await self.session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()

    async def save_all(self, categories: list[Category]) -> list[Category]:
        """Save multiple categories to database.

        Args:
            categories: Categories to save.

        Returns:
            Saved categories.
        """
        self.session.add_all(categories)
        await self.session.flush()
        return categories

    async def delete_all(self) -> int:
        """Delete every category.

        Returns:
            Number of deleted categories.
        """
        result = await self.session.execute(delete(Category))
        return result.rowcount

    async def count(self) -> int:
        """Count categories.

        Returns:
            Number of categories.
        """
        result = await self.session.execute(select(func.count(Category.id)))
        return result.scalar_one()


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            rows = await repo.find_all_with_category_name()
            for product, category_name in rows:
                ...
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save.

        Returns:
            Saved product with its id assigned.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def save_all(self, products: list[Product]) -> list[Product]:
        """Save multiple products to database.

        Args:
            products: Products to save.

        Returns:
            Saved products.
        """
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        return await self.session.get(Product, product_id)

    async def find_all_with_category_name(self) -> list[tuple[Product, str | None]]:
        """Get every product joined with its category name.

        A product whose category is missing or dangling comes back
        with a None category name.

        Returns:
            (product, category_name) pairs sorted by product name ascending.
        """
        query = (
            select(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .order_by(Product.name)
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def get_with_category_name(
        self,
        product_id: str,
    ) -> tuple[Product, str | None] | None:
        """Get one product joined with its category name.

        Args:
            product_id: Product ID.

        Returns:
            (product, category_name) pair, or None if the product is absent.
        """
        query = (
            select(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .where(Product.id == product_id)
        )
        result = await self.session.execute(query)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def update(self, product: Product, values: dict[str, Any]) -> Product:
        """Apply column values to a loaded product.

        Args:
            product: Product to update.
            values: Column name to new value.

        Returns:
            Updated product.
        """
        for key, value in values.items():
            setattr(product, key, value)
        await self.session.flush()
        return product

    async def delete_by_id(self, product_id: str) -> bool:
        """Delete a product by ID.

        Args:
            product_id: Product ID.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(delete(Product).where(Product.id == product_id))
        return result.rowcount > 0

    async def delete_all(self) -> int:
        """Delete every product.

        Returns:
            Number of deleted products.
        """
        result = await self.session.execute(delete(Product))
        return result.rowcount

    async def count(self, low_stock_only: bool = False) -> int:
        """Count products.

        Args:
            low_stock_only: Only count rows at or below their own reorder level.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))
        if low_stock_only:
            # Per-row comparison against each product's own threshold
            query = query.where(Product.stock_quantity <= Product.reorder_level)
        result = await self.session.execute(query)
        return result.scalar_one()
