"""Catalog service for product operations.

The boundary between the back-office workflows and storage. Every
public method is one unit of work: it commits on success, rolls back on
failure, and reports storage problems as StorageError.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, NoReturn
from uuid import UUID

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.catalog.models import Category, Product
from backoffice.catalog.repository import CategoryRepository, ProductRepository
from backoffice.catalog.seed import DEMO_CATEGORIES, DEMO_PRODUCTS
from backoffice.domain.exceptions import NotFoundError, StorageError
from backoffice.domain.value_objects import ProductDraft, StockStatus, stock_status

logger = structlog.get_logger()


# ============================================================================
# Result Types
# ============================================================================


@dataclass(frozen=True)
class CategoryRecord:
    """Category as offered in a selection list."""

    id: str
    name: str


@dataclass(frozen=True)
class ProductListing:
    """Product joined with its category name.

    Attributes:
        id: Product ID.
        name: Product name.
        barcode: Barcode, if any.
        category_id: Referenced category, if any.
        category_name: Joined category name; None when uncategorized or dangling.
        description: Description, if any.
        unit_price: Price in major currency units.
        stock_quantity: On-hand count.
        reorder_level: Low-stock threshold.
    """

    id: str
    name: str
    barcode: str | None
    category_id: str | None
    category_name: str | None
    description: str | None
    unit_price: Decimal
    stock_quantity: int
    reorder_level: int

    @property
    def stock_status(self) -> StockStatus:
        """Stock status computed from this snapshot's own values."""
        return stock_status(self.stock_quantity, self.reorder_level)

    @classmethod
    def from_row(cls, product: Product, category_name: str | None) -> "ProductListing":
        """Build a listing from a joined row.

        Args:
            product: Product row.
            category_name: Joined category name.

        Returns:
            Immutable listing.
        """
        return cls(
            id=str(product.id),
            name=product.name,
            barcode=product.barcode,
            category_id=str(product.category_id) if product.category_id else None,
            category_name=category_name,
            description=product.description,
            unit_price=Decimal(product.unit_price),
            stock_quantity=product.stock_quantity,
            reorder_level=product.reorder_level,
        )


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate catalog indicators for the dashboard."""

    total_products: int
    low_stock_count: int
    total_categories: int


def _normalize_id(value: str) -> str | None:
    """Return the canonical UUID string, or None if value is not a UUID."""
    try:
        return str(UUID(str(value)))
    except ValueError:
        return None


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            categories = await service.list_categories()
            created = await service.create_product(
                ProductDraft(name="Milk 1L", unit_price=Decimal("2.50"), stock_quantity=40)
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_categories(self) -> list[CategoryRecord]:
        """List categories sorted by name.

        Returns:
            Categories sorted by name ascending; empty when none exist.

        Raises:
            StorageError: If storage cannot be read.
        """
        try:
            categories = await self.categories.find_all()
        except SQLAlchemyError as e:
            await self._fail("list_categories", e)

        return [CategoryRecord(id=str(c.id), name=c.name) for c in categories]

    async def list_products(self) -> list[ProductListing]:
        """List products joined with their category names.

        Issued as a single joined query so the caller can replace its
        snapshot in one step.

        Returns:
            Products sorted by name ascending.

        Raises:
            StorageError: If storage cannot be read.
        """
        try:
            rows = await self.products.find_all_with_category_name()
        except SQLAlchemyError as e:
            await self._fail("list_products", e)

        return [ProductListing.from_row(product, name) for product, name in rows]

    async def get_product(self, product_id: str) -> ProductListing:
        """Get one product with its category name.

        Args:
            product_id: Product ID.

        Returns:
            The product listing.

        Raises:
            NotFoundError: If the product does not exist.
            StorageError: If storage cannot be read.
        """
        normalized = _normalize_id(product_id)
        if normalized is None:
            raise NotFoundError("Product", product_id)

        try:
            row = await self.products.get_with_category_name(normalized)
        except SQLAlchemyError as e:
            await self._fail("get_product", e, product_id=product_id)

        if row is None:
            raise NotFoundError("Product", product_id)
        return ProductListing.from_row(*row)

    async def get_stats(self) -> CatalogStats:
        """Get dashboard indicators.

        Low stock is counted per row against each product's own
        reorder level.

        Returns:
            Catalog totals.

        Raises:
            StorageError: If storage cannot be read.
        """
        try:
            total_products = await self.products.count()
            low_stock = await self.products.count(low_stock_only=True)
            total_categories = await self.categories.count()
        except SQLAlchemyError as e:
            await self._fail("get_stats", e)

        return CatalogStats(
            total_products=total_products,
            low_stock_count=low_stock,
            total_categories=total_categories,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_product(self, draft: ProductDraft) -> ProductListing:
        """Insert a new product.

        Args:
            draft: Product field values.

        Returns:
            The created product with its assigned id.

        Raises:
            ValidationError: If required fields are missing or invalid.
            StorageError: If storage rejects the insert.
        """
        draft.validate()

        try:
            product = await self.products.save(Product(**draft.to_values()))
            await self.session.commit()
            row = await self.products.get_with_category_name(product.id)
        except SQLAlchemyError as e:
            await self._fail("create_product", e, name=draft.name)

        logger.info("Product created", product_id=str(product.id), name=product.name)
        return ProductListing.from_row(*row)

    async def update_product(self, product_id: str, draft: ProductDraft) -> ProductListing:
        """Overwrite an existing product's fields.

        Args:
            product_id: Product ID.
            draft: New field values.

        Returns:
            The updated product.

        Raises:
            ValidationError: If required fields are missing or invalid.
            NotFoundError: If the product no longer exists.
            StorageError: If storage rejects the update.
        """
        draft.validate()

        normalized = _normalize_id(product_id)
        if normalized is None:
            raise NotFoundError("Product", product_id)

        try:
            product = await self.products.get_by_id(normalized)
            if product is None:
                raise NotFoundError("Product", product_id)
            await self.products.update(product, draft.to_values())
            await self.session.commit()
            row = await self.products.get_with_category_name(normalized)
        except SQLAlchemyError as e:
            await self._fail("update_product", e, product_id=product_id)

        logger.info(
            "Product updated",
            product_id=product_id,
            stock_quantity=product.stock_quantity,
            reorder_level=product.reorder_level,
        )
        return ProductListing.from_row(*row)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Args:
            product_id: Product ID.

        Raises:
            NotFoundError: If the product is already absent.
            StorageError: If storage rejects the delete.
        """
        normalized = _normalize_id(product_id)
        if normalized is None:
            raise NotFoundError("Product", product_id)

        try:
            deleted = await self.products.delete_by_id(normalized)
            if not deleted:
                await self.session.rollback()
                raise NotFoundError("Product", product_id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("delete_product", e, product_id=product_id)

        logger.info("Product deleted", product_id=product_id)

    async def seed_catalog(self, clear_existing: bool = True) -> dict[str, Any]:
        """Load the demo supermarket catalog.

        Args:
            clear_existing: Whether to delete existing products and categories first.

        Returns:
            Seeding result with counts.

        Raises:
            StorageError: If storage rejects the writes.
        """
        try:
            deleted = 0
            if clear_existing:
                deleted = await self.products.delete_all()
                await self.categories.delete_all()

            categories = {name: Category(name=name) for name in DEMO_CATEGORIES}
            await self.categories.save_all(list(categories.values()))

            products = [
                Product(
                    name=name,
                    barcode=barcode,
                    category_id=categories[category].id,
                    unit_price=Decimal(price),
                    stock_quantity=stock,
                    reorder_level=reorder,
                )
                for name, barcode, category, price, stock, reorder in DEMO_PRODUCTS
            ]
            await self.products.save_all(products)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self._fail("seed_catalog", e)

        low_stock = sum(1 for p in products if p.stock_status == StockStatus.LOW_STOCK)
        return {
            "deleted": deleted,
            "categories_created": len(categories),
            "products_created": len(products),
            "low_stock": low_stock,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _fail(self, operation: str, error: SQLAlchemyError, **context: Any) -> NoReturn:
        """Roll back and re-raise a storage failure as StorageError.

        Args:
            operation: Name of the failing operation.
            error: Underlying SQLAlchemy error.
            **context: Extra log fields.

        Raises:
            StorageError: Always.
        """
        await self.session.rollback()
        # DBAPI errors carry the driver message on .orig
        message = str(getattr(error, "orig", None) or error)
        logger.error("Storage operation failed", operation=operation, error=message, **context)
        raise StorageError(message, details={"operation": operation}) from error
