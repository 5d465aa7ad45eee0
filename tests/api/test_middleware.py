"""Tests for API middleware and error formatting."""

from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from backoffice.api.dependencies import get_catalog_service
from backoffice.domain.exceptions import StorageError
from backoffice.main import app


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    async def test_generates_request_id_if_not_provided(self, client: AsyncClient) -> None:
        """Should generate request ID if not in request headers."""
        response = await client.get("/health")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    async def test_uses_provided_request_id(self, client: AsyncClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = await client.get("/health", headers={"X-Request-ID": custom_id})
        assert response.headers["X-Request-ID"] == custom_id

    async def test_error_body_carries_request_id(self, client: AsyncClient) -> None:
        """Error responses echo the request ID."""
        response = await client.get(
            "/products/not-a-uuid",
            headers={"X-Request-ID": "req-42"},
        )
        assert response.status_code == 404
        assert response.json()["request_id"] == "req-42"


class TestStorageErrors:
    """Tests for storage failure responses."""

    async def test_storage_failure_is_503(self, client: AsyncClient) -> None:
        """Storage failures map to 503 with the driver message."""
        service = AsyncMock()
        service.list_products.side_effect = StorageError("connection refused")
        app.dependency_overrides[get_catalog_service] = lambda: service

        response = await client.get("/products")

        assert response.status_code == 503
        data = response.json()
        assert data["error_code"] == "STORAGE_ERROR"
        assert data["message"] == "connection refused"

    async def test_escaped_driver_error_is_503(self, client: AsyncClient) -> None:
        """Driver errors that bypass the service still map to 503."""
        service = AsyncMock()
        service.get_stats.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )
        app.dependency_overrides[get_catalog_service] = lambda: service

        response = await client.get("/dashboard/stats", headers={"X-Request-ID": "req-7"})

        assert response.status_code == 503
        data = response.json()
        assert data["error_code"] == "STORAGE_ERROR"
        assert data["request_id"] == "req-7"
        assert response.headers["X-Request-ID"] == "req-7"
