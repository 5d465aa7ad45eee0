"""Product Catalog.

Provides the category/product models, repositories, the catalog
service boundary and the text filter used by the catalog view.
"""

from backoffice.catalog.filtering import filter_products, matches_query
from backoffice.catalog.models import Category, Product
from backoffice.catalog.repository import CategoryRepository, ProductRepository
from backoffice.catalog.service import (
    CatalogService,
    CatalogStats,
    CategoryRecord,
    ProductListing,
)

__all__ = [
    # Models
    "Category",
    "Product",
    # Repository
    "CategoryRepository",
    "ProductRepository",
    # Service
    "CatalogService",
    "CatalogStats",
    "CategoryRecord",
    "ProductListing",
    # Filtering
    "filter_products",
    "matches_query",
]
