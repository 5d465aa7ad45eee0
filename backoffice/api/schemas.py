"""API schemas for the back-office API.

Pydantic models for request/response validation and serialization.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from backoffice.catalog.service import CatalogStats, CategoryRecord, ProductListing
from backoffice.domain.value_objects import (
    DEFAULT_REORDER_LEVEL,
    MAX_COUNT,
    ProductDraft,
    StockStatus,
)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Category Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """Category option for product forms."""

    id: str = Field(..., description="Category identifier")
    name: str = Field(..., description="Category display name")

    @classmethod
    def from_record(cls, record: CategoryRecord) -> "CategorySchema":
        """Convert a category record."""
        return cls(id=record.id, name=record.name)


class CategoriesListResponse(BaseModel):
    """Categories sorted by name."""

    items: list[CategorySchema] = Field(default_factory=list)
    total: int = Field(..., description="Number of categories")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductRequest(BaseModel):
    """Request body for creating or replacing a product."""

    name: str = Field(..., max_length=500, description="Product name (required)")
    barcode: str | None = Field(default=None, max_length=100, description="Barcode")
    category_id: str | None = Field(default=None, description="Category identifier")
    description: str | None = Field(default=None, description="Free-text description")
    unit_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Unit price")
    stock_quantity: int = Field(..., ge=0, le=MAX_COUNT, description="On-hand count")
    reorder_level: int = Field(
        default=DEFAULT_REORDER_LEVEL, ge=0, le=MAX_COUNT, description="Low-stock threshold"
    )

    def to_draft(self) -> ProductDraft:
        """Convert to a domain draft."""
        return ProductDraft(
            name=self.name,
            unit_price=self.unit_price,
            stock_quantity=self.stock_quantity,
            reorder_level=self.reorder_level,
            barcode=self.barcode,
            category_id=self.category_id,
            description=self.description,
        )


class ProductResponse(BaseModel):
    """Product with joined category name and derived stock status."""

    id: str
    name: str
    barcode: str | None = None
    category_id: str | None = None
    category_name: str | None = None
    description: str | None = None
    unit_price: Decimal
    stock_quantity: int
    reorder_level: int
    stock_status: StockStatus = Field(..., description="Derived from stock and reorder level")

    @classmethod
    def from_listing(cls, product: ProductListing) -> "ProductResponse":
        """Convert a product listing."""
        return cls(
            id=product.id,
            name=product.name,
            barcode=product.barcode,
            category_id=product.category_id,
            category_name=product.category_name,
            description=product.description,
            unit_price=product.unit_price,
            stock_quantity=product.stock_quantity,
            reorder_level=product.reorder_level,
            stock_status=product.stock_status,
        )


class ProductsListResponse(BaseModel):
    """Product list after the search projection."""

    items: list[ProductResponse] = Field(default_factory=list)
    total: int = Field(..., description="Number of products shown")
    search: str | None = Field(default=None, description="Applied search text")


# ============================================================================
# Dashboard Schemas
# ============================================================================


class DashboardStatsResponse(BaseModel):
    """Aggregate catalog indicators."""

    total_products: int
    low_stock_count: int
    total_categories: int

    @classmethod
    def from_stats(cls, stats: CatalogStats) -> "DashboardStatsResponse":
        """Convert catalog stats."""
        return cls(
            total_products=stats.total_products,
            low_stock_count=stats.low_stock_count,
            total_categories=stats.total_categories,
        )
