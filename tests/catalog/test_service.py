"""Tests for the catalog service against an in-memory database."""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from backoffice.catalog.models import Category
from backoffice.catalog.service import CatalogService
from backoffice.domain.exceptions import NotFoundError, StorageError, ValidationError
from backoffice.domain.value_objects import ProductDraft, StockStatus


class TestCreateProduct:
    """Tests for create_product."""

    async def test_round_trip(self, service: CatalogService, milk_draft: ProductDraft) -> None:
        """A created product is listed with its category name."""
        created = await service.create_product(milk_draft)

        assert created.id
        products = await service.list_products()
        assert len(products) == 1
        listed = products[0]
        assert listed.id == created.id
        assert listed.name == "Milk 1L"
        assert listed.category_name == "Dairy"
        assert listed.unit_price == Decimal("2.50")
        assert listed.stock_quantity == 40
        assert listed.stock_status == StockStatus.IN_STOCK

    async def test_assigns_distinct_ids(self, service: CatalogService) -> None:
        """Each create gets a new id."""
        draft = ProductDraft(name="Bread", unit_price=Decimal("2.39"), stock_quantity=30)
        first = await service.create_product(draft)
        second = await service.create_product(draft)
        assert first.id != second.id

    async def test_invalid_draft_never_reaches_storage(self, service: CatalogService) -> None:
        """Validation fails before any write."""
        draft = ProductDraft(name="", unit_price=Decimal("1.00"), stock_quantity=1)
        with pytest.raises(ValidationError):
            await service.create_product(draft)
        assert await service.list_products() == []

    async def test_uncategorized(self, service: CatalogService) -> None:
        """A product without a category lists a None category name."""
        draft = ProductDraft(name="Loose Onions", unit_price=Decimal("0.99"), stock_quantity=5)
        created = await service.create_product(draft)
        assert created.category_id is None
        assert created.category_name is None

    async def test_dangling_category(self, service: CatalogService) -> None:
        """A category reference with no category row lists as uncategorized."""
        draft = ProductDraft(
            name="Mystery Item",
            unit_price=Decimal("1.00"),
            stock_quantity=5,
            category_id=str(uuid4()),
        )
        await service.create_product(draft)

        products = await service.list_products()
        assert products[0].category_id is not None
        assert products[0].category_name is None


class TestUpdateProduct:
    """Tests for update_product."""

    async def test_stock_drop_flips_status(
        self, service: CatalogService, milk_draft: ProductDraft
    ) -> None:
        """Lowering stock to the threshold or below shows low stock."""
        created = await service.create_product(milk_draft)

        updated = await service.update_product(created.id, replace(milk_draft, stock_quantity=5))

        assert updated.stock_quantity == 5
        assert updated.stock_status == StockStatus.LOW_STOCK
        listed = await service.get_product(created.id)
        assert listed.stock_status == StockStatus.LOW_STOCK

    async def test_overwrites_every_field(
        self, service: CatalogService, milk_draft: ProductDraft
    ) -> None:
        """Cleared optionals are cleared in storage."""
        created = await service.create_product(milk_draft)

        updated = await service.update_product(
            created.id,
            replace(milk_draft, barcode=None, category_id=None, unit_price=Decimal("2.75")),
        )

        assert updated.barcode is None
        assert updated.category_name is None
        assert updated.unit_price == Decimal("2.75")

    async def test_missing_product(self, service: CatalogService, milk_draft: ProductDraft) -> None:
        """Updating a deleted product fails with NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.update_product(str(uuid4()), milk_draft)

    async def test_malformed_id(self, service: CatalogService, milk_draft: ProductDraft) -> None:
        """A malformed id can't match any product."""
        with pytest.raises(NotFoundError):
            await service.update_product("not-a-uuid", milk_draft)


class TestDeleteProduct:
    """Tests for delete_product."""

    async def test_delete(self, service: CatalogService, milk_draft: ProductDraft) -> None:
        """A deleted product disappears from the listing."""
        created = await service.create_product(milk_draft)

        await service.delete_product(created.id)

        assert await service.list_products() == []

    async def test_delete_missing(self, service: CatalogService) -> None:
        """Deleting an absent product reports NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_product(str(uuid4()))
        assert isinstance(exc_info.value, StorageError)

    async def test_delete_twice(self, service: CatalogService, milk_draft: ProductDraft) -> None:
        """The second delete of the same product fails."""
        created = await service.create_product(milk_draft)
        await service.delete_product(created.id)
        with pytest.raises(NotFoundError):
            await service.delete_product(created.id)


class TestListing:
    """Tests for the read operations."""

    async def test_products_sorted_by_name(self, service: CatalogService) -> None:
        """Products come back in name order."""
        for name in ("Yogurt", "Apples", "Milk"):
            await service.create_product(
                ProductDraft(name=name, unit_price=Decimal("1.00"), stock_quantity=50)
            )

        names = [p.name for p in await service.list_products()]
        assert names == ["Apples", "Milk", "Yogurt"]

    async def test_categories_sorted_by_name(self, service: CatalogService, session) -> None:
        """Categories come back in name order."""
        session.add_all([Category(name="Snacks"), Category(name="Bakery"), Category(name="Dairy")])
        await session.commit()

        names = [c.name for c in await service.list_categories()]
        assert names == ["Bakery", "Dairy", "Snacks"]

    async def test_no_categories(self, service: CatalogService) -> None:
        """An empty category table lists nothing."""
        assert await service.list_categories() == []

    async def test_get_missing_product(self, service: CatalogService) -> None:
        """Looking up an unknown id fails."""
        with pytest.raises(NotFoundError):
            await service.get_product(str(uuid4()))


class TestStats:
    """Tests for dashboard indicators."""

    async def test_low_stock_uses_each_rows_threshold(self, service: CatalogService) -> None:
        """Each product is compared with its own reorder level."""
        rows = [
            ("A", 5, 10),  # low
            ("B", 10, 10),  # low, on the threshold
            ("C", 11, 10),  # in stock
            ("D", 15, 20),  # low against its own level
            ("E", 3, 0),  # in stock
        ]
        for name, stock, reorder in rows:
            await service.create_product(
                ProductDraft(
                    name=name,
                    unit_price=Decimal("1.00"),
                    stock_quantity=stock,
                    reorder_level=reorder,
                )
            )

        stats = await service.get_stats()
        assert stats.total_products == 5
        assert stats.low_stock_count == 3
        assert stats.total_categories == 0

    async def test_seed_catalog(self, service: CatalogService) -> None:
        """Seeding loads the demo catalog and reports its low-stock rows."""
        result = await service.seed_catalog()

        assert result["deleted"] == 0
        assert result["categories_created"] == 7
        assert result["products_created"] == 14
        assert result["low_stock"] == 4

        stats = await service.get_stats()
        assert stats.total_products == 14
        assert stats.total_categories == 7
        assert stats.low_stock_count == 4

    async def test_reseed_replaces(self, service: CatalogService) -> None:
        """Seeding again clears the previous demo data."""
        await service.seed_catalog()
        result = await service.seed_catalog()

        assert result["deleted"] == 14
        stats = await service.get_stats()
        assert stats.total_products == 14


class TestStorageFailures:
    """Tests for storage error wrapping."""

    @pytest.fixture
    def broken_session(self) -> AsyncMock:
        """Session whose statements fail as if the server were down."""
        session = AsyncMock()
        session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )
        return session

    async def test_list_products_failure(self, broken_session: AsyncMock) -> None:
        """Driver errors surface as StorageError with the driver message."""
        service = CatalogService(broken_session)

        with pytest.raises(StorageError) as exc_info:
            await service.list_products()

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.details == {"operation": "list_products"}
        broken_session.rollback.assert_awaited_once()

    async def test_delete_failure(self, broken_session: AsyncMock) -> None:
        """A failing delete is a StorageError, not NotFoundError."""
        service = CatalogService(broken_session)

        with pytest.raises(StorageError) as exc_info:
            await service.delete_product(str(uuid4()))

        assert not isinstance(exc_info.value, NotFoundError)
