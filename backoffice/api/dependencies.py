"""Shared API dependencies and error conversion."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.catalog.service import CatalogService
from backoffice.domain.exceptions import DomainError, NotFoundError, StorageError, ValidationError
from backoffice.infrastructure.database import get_session


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error into an HTTP error response.

    Args:
        error: Domain error raised by the catalog.

    Returns:
        HTTPException with the standard error detail shape.
    """
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=422,
            detail={
                "error_code": "VALIDATION_ERROR",
                "message": error.message,
                "details": [
                    {"field": name, "message": message}
                    for name, message in sorted(error.field_errors.items())
                ],
            },
        )
    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": f"{error.entity_type.upper()}_NOT_FOUND",
                "message": error.message,
            },
        )
    if isinstance(error, StorageError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error_code": "STORAGE_ERROR",
                "message": error.message,
            },
        )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error_code": "DOMAIN_ERROR", "message": error.message},
    )
