"""Tests for dashboard endpoints."""

from httpx import AsyncClient

from backoffice.catalog.service import CatalogService


async def test_stats_empty(client: AsyncClient) -> None:
    """An empty catalog has zero indicators."""
    response = await client.get("/dashboard/stats")

    assert response.status_code == 200
    assert response.json() == {"total_products": 0, "low_stock_count": 0, "total_categories": 0}


async def test_stats_after_seed(client: AsyncClient, service: CatalogService) -> None:
    """Indicators reflect the seeded catalog."""
    await service.seed_catalog()

    response = await client.get("/dashboard/stats")

    assert response.json() == {"total_products": 14, "low_stock_count": 4, "total_categories": 7}
