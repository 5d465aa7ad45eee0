"""SQLAlchemy models for the product catalog.

Defines Category and Product tables for persistent storage.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.domain.value_objects import DEFAULT_REORDER_LEVEL, StockStatus, stock_status
from backoffice.infrastructure.database import Base


class Category(Base):
    """Product category.

    Categories are maintained outside the catalog workflows; products
    only reference them.

    Attributes:
        id: Unique category identifier (UUID).
        name: Display label, unique by convention.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    products: Mapped[list["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID), assigned on insert.
        name: Product display name.
        barcode: Optional barcode.
        category_id: Optional category reference.
        description: Optional description.
        unit_price: Price in major currency units.
        stock_quantity: On-hand count.
        reorder_level: Low-stock threshold.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    barcode: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    category_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reorder_level: Mapped[int] = mapped_column(
        Integer, nullable=False, default=DEFAULT_REORDER_LEVEL
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    category: Mapped[Category | None] = relationship("Category", back_populates="products")

    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_products_unit_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("reorder_level >= 0", name="ck_products_reorder_non_negative"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"

    @property
    def stock_status(self) -> StockStatus:
        """Stock status derived from the current row values."""
        return stock_status(self.stock_quantity, self.reorder_level)
