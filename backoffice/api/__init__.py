"""API layer for the back-office service.

Contains routers, middleware and request/response schemas.
"""

from backoffice.api.categories import router as categories_router
from backoffice.api.dashboard import router as dashboard_router
from backoffice.api.health import router as health_router
from backoffice.api.products import router as products_router

__all__ = [
    "categories_router",
    "dashboard_router",
    "health_router",
    "products_router",
]
