"""In-memory catalog port and listing builders for workflow tests."""

import asyncio
from dataclasses import replace
from decimal import Decimal
from uuid import uuid4

from backoffice.catalog.service import CategoryRecord, ProductListing
from backoffice.domain.exceptions import NotFoundError
from backoffice.domain.value_objects import ProductDraft

DAIRY = CategoryRecord(id="c0000000-0000-0000-0000-000000000001", name="Dairy")
PRODUCE = CategoryRecord(id="c0000000-0000-0000-0000-000000000002", name="Produce")


def make_listing(**overrides) -> ProductListing:
    """Build a product listing with sensible defaults."""
    values = {
        "id": str(uuid4()),
        "name": "Milk 1L",
        "barcode": "5000112548181",
        "category_id": DAIRY.id,
        "category_name": DAIRY.name,
        "description": None,
        "unit_price": Decimal("2.50"),
        "stock_quantity": 40,
        "reorder_level": 10,
    }
    values.update(overrides)
    return ProductListing(**values)


class FakeCatalog:
    """In-memory catalog port.

    Individual calls can be held open with hold() to simulate slow
    responses arriving after the caller moved on.
    """

    def __init__(self, products=(), categories=(DAIRY, PRODUCE)) -> None:
        self.products = {p.id: p for p in products}
        self.categories = list(categories)
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def hold(self, operation: str) -> asyncio.Event:
        """Block the next call of an operation until the event is set."""
        gate = asyncio.Event()
        self._gates[operation] = gate
        return gate

    async def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        gate = self._gates.pop(operation, None)
        if gate is not None:
            await gate.wait()

    async def list_categories(self) -> list[CategoryRecord]:
        result = sorted(self.categories, key=lambda c: c.name)
        await self._enter("list_categories")
        return result

    async def list_products(self) -> list[ProductListing]:
        # Snapshot taken when the request is issued, not when it returns
        result = sorted(self.products.values(), key=lambda p: p.name)
        await self._enter("list_products")
        return result

    async def create_product(self, draft: ProductDraft) -> ProductListing:
        await self._enter("create_product")
        draft.validate()
        product = self._listing(str(uuid4()), draft)
        self.products[product.id] = product
        return product

    async def update_product(self, product_id: str, draft: ProductDraft) -> ProductListing:
        await self._enter("update_product")
        draft.validate()
        if product_id not in self.products:
            raise NotFoundError("Product", product_id)
        product = self._listing(product_id, draft)
        self.products[product_id] = product
        return product

    async def delete_product(self, product_id: str) -> None:
        await self._enter("delete_product")
        if self.products.pop(product_id, None) is None:
            raise NotFoundError("Product", product_id)

    def _listing(self, product_id: str, draft: ProductDraft) -> ProductListing:
        names = {c.id: c.name for c in self.categories}
        values = draft.to_values()
        return replace(
            make_listing(),
            id=product_id,
            category_name=names.get(values["category_id"]),
            **values,
        )
