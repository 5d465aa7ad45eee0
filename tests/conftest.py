"""Shared fixtures for the back-office test suite.

Every test that touches storage gets a fresh in-memory SQLite database,
so the suite runs without PostgreSQL.
"""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backoffice.catalog import models  # noqa: F401
from backoffice.catalog.models import Category
from backoffice.catalog.service import CatalogService
from backoffice.domain.value_objects import ProductDraft
from backoffice.infrastructure.database import Base, get_session
from backoffice.main import app


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an async engine bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory matching the application's settings."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Database session for one test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def service(session: AsyncSession) -> CatalogService:
    """Catalog service on the test database."""
    return CatalogService(session)


@pytest.fixture
async def dairy(session: AsyncSession) -> Category:
    """A stored 'Dairy' category."""
    category = Category(name="Dairy")
    session.add(category)
    await session.commit()
    return category


@pytest.fixture
def milk_draft(dairy: Category) -> ProductDraft:
    """Draft for 'Milk 1L' in the Dairy category."""
    return ProductDraft(
        name="Milk 1L",
        barcode="5000112548181",
        category_id=dairy.id,
        unit_price=Decimal("2.50"),
        stock_quantity=40,
        reorder_level=10,
    )


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests use the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
