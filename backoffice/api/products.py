"""Product API endpoints.

Provides listing with search, lookup, create, replace and delete.
"""

from fastapi import APIRouter, Query, Response, status

from backoffice.api.dependencies import CatalogServiceDep, to_http_exception
from backoffice.api.schemas import (
    ErrorResponse,
    ProductRequest,
    ProductResponse,
    ProductsListResponse,
)
from backoffice.catalog.filtering import filter_products
from backoffice.domain.exceptions import DomainError

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductsListResponse,
    responses={503: {"model": ErrorResponse}},
    summary="List products",
    description="List products sorted by name, optionally narrowed by a search query.",
)
async def list_products(
    service: CatalogServiceDep,
    search: str | None = Query(
        default=None,
        description="Case-insensitive match on name, barcode or category name",
    ),
) -> ProductsListResponse:
    """List products with derived stock status.

    Args:
        service: Catalog service.
        search: Optional search text.

    Returns:
        Matching products in name order.
    """
    try:
        products = await service.list_products()
    except DomainError as e:
        raise to_http_exception(e) from e

    visible = filter_products(products, search)
    return ProductsListResponse(
        items=[ProductResponse.from_listing(p) for p in visible],
        total=len(visible),
        search=search,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(product_id: str, service: CatalogServiceDep) -> ProductResponse:
    """Get one product by ID."""
    try:
        product = await service.get_product(product_id)
    except DomainError as e:
        raise to_http_exception(e) from e
    return ProductResponse.from_listing(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Create product",
)
async def create_product(request: ProductRequest, service: CatalogServiceDep) -> ProductResponse:
    """Create a product.

    Args:
        request: Product fields.
        service: Catalog service.

    Returns:
        Created product with its assigned id.
    """
    try:
        product = await service.create_product(request.to_draft())
    except DomainError as e:
        raise to_http_exception(e) from e
    return ProductResponse.from_listing(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: str,
    request: ProductRequest,
    service: CatalogServiceDep,
) -> ProductResponse:
    """Replace every field of an existing product.

    Args:
        product_id: Product ID.
        request: New product fields.
        service: Catalog service.

    Returns:
        Updated product.
    """
    try:
        product = await service.update_product(product_id, request.to_draft())
    except DomainError as e:
        raise to_http_exception(e) from e
    return ProductResponse.from_listing(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(product_id: str, service: CatalogServiceDep) -> Response:
    """Delete a product."""
    try:
        await service.delete_product(product_id)
    except DomainError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
