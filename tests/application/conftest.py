"""Fixtures for workflow tests.

Workflows only see the catalog port, so most tests drive them with an
in-memory fake instead of a database.
"""

from decimal import Decimal

import pytest

from backoffice.catalog.service import ProductListing

from fakes import PRODUCE, FakeCatalog, make_listing


@pytest.fixture
def milk() -> ProductListing:
    """Milk, comfortably in stock."""
    return make_listing(name="Milk 1L")


@pytest.fixture
def bananas() -> ProductListing:
    """Bananas, below their reorder level."""
    return make_listing(
        name="Bananas 1kg",
        barcode=None,
        category_id=PRODUCE.id,
        category_name=PRODUCE.name,
        unit_price=Decimal("1.99"),
        stock_quantity=12,
        reorder_level=15,
    )


@pytest.fixture
def catalog(milk: ProductListing, bananas: ProductListing) -> FakeCatalog:
    """Fake catalog holding milk and bananas."""
    return FakeCatalog(products=[milk, bananas])
