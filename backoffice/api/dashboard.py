"""Dashboard API endpoints."""

from fastapi import APIRouter

from backoffice.api.dependencies import CatalogServiceDep, to_http_exception
from backoffice.api.schemas import DashboardStatsResponse, ErrorResponse
from backoffice.domain.exceptions import DomainError

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    responses={503: {"model": ErrorResponse}},
    summary="Catalog indicators",
    description="Product, low-stock and category counts.",
)
async def get_stats(service: CatalogServiceDep) -> DashboardStatsResponse:
    """Get catalog indicators.

    Low stock counts products at or below their own reorder level.
    """
    try:
        stats = await service.get_stats()
    except DomainError as e:
        raise to_http_exception(e) from e
    return DashboardStatsResponse.from_stats(stats)
