"""Category API endpoints."""

from fastapi import APIRouter

from backoffice.api.dependencies import CatalogServiceDep, to_http_exception
from backoffice.api.schemas import CategoriesListResponse, CategorySchema, ErrorResponse
from backoffice.domain.exceptions import DomainError

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=CategoriesListResponse,
    responses={503: {"model": ErrorResponse}},
    summary="List categories",
    description="Categories sorted by name, for the product form selection list.",
)
async def list_categories(service: CatalogServiceDep) -> CategoriesListResponse:
    """List categories sorted by name."""
    try:
        categories = await service.list_categories()
    except DomainError as e:
        raise to_http_exception(e) from e

    return CategoriesListResponse(
        items=[CategorySchema.from_record(c) for c in categories],
        total=len(categories),
    )
