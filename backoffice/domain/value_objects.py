"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self

from backoffice.domain.base import ValueObject
from backoffice.domain.exceptions import ValidationError

DEFAULT_REORDER_LEVEL = 10

# Largest values the Numeric(10, 2) and Integer columns can hold
MAX_UNIT_PRICE = Decimal("99999999.99")
MAX_COUNT = 2_147_483_647


# ============================================================================
# Stock Status
# ============================================================================


class StockStatus(str, Enum):
    """Derived stock status of a product. Never persisted."""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"

    @property
    def label(self) -> str:
        """Human-readable badge text."""
        return "Low Stock" if self is StockStatus.LOW_STOCK else "In Stock"


def stock_status(stock_quantity: int, reorder_level: int) -> StockStatus:
    """Derive stock status from on-hand count and reorder threshold.

    A product sitting exactly on its threshold is already low.

    Args:
        stock_quantity: Current on-hand count.
        reorder_level: Reorder threshold.

    Returns:
        LOW_STOCK when stock_quantity <= reorder_level, otherwise IN_STOCK.
    """
    if stock_quantity <= reorder_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


# ============================================================================
# Notices
# ============================================================================


class NoticeKind(str, Enum):
    """Severity of a user-visible notice."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice(ValueObject):
    """User-visible feedback returned by a workflow step.

    Workflows return notices instead of publishing them on a shared
    channel; the caller decides how to display them.
    """

    kind: NoticeKind
    title: str
    description: str = ""

    @classmethod
    def success(cls, title: str, description: str = "") -> Self:
        """Create a success notice."""
        return cls(kind=NoticeKind.SUCCESS, title=title, description=description)

    @classmethod
    def error(cls, title: str, description: str = "") -> Self:
        """Create an error notice."""
        return cls(kind=NoticeKind.ERROR, title=title, description=description)

    @property
    def is_error(self) -> bool:
        """Check if this notice reports a failure."""
        return self.kind == NoticeKind.ERROR


# ============================================================================
# Product Draft
# ============================================================================


@dataclass(frozen=True)
class ProductDraft(ValueObject):
    """Typed product field values ready to be written to storage.

    Attributes:
        name: Display name (required, non-empty).
        unit_price: Price in major currency units, two decimal places.
        stock_quantity: On-hand count.
        reorder_level: Low-stock threshold.
        barcode: Optional barcode.
        category_id: Optional category reference.
        description: Optional free text.
    """

    name: str
    unit_price: Decimal
    stock_quantity: int
    reorder_level: int = DEFAULT_REORDER_LEVEL
    barcode: str | None = None
    category_id: str | None = None
    description: str | None = None

    def validate(self) -> None:
        """Check required fields and numeric bounds.

        Raises:
            ValidationError: With one entry per offending field.
        """
        errors: dict[str, str] = {}

        if not self.name or not self.name.strip():
            errors["name"] = "Name is required"

        if not isinstance(self.unit_price, Decimal) or not self.unit_price.is_finite():
            errors["unit_price"] = "Unit price must be a number"
        elif self.unit_price < 0:
            errors["unit_price"] = "Unit price cannot be negative"
        elif self.unit_price > MAX_UNIT_PRICE:
            errors["unit_price"] = f"Unit price cannot exceed {MAX_UNIT_PRICE}"

        for field_name in ("stock_quantity", "reorder_level"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors[field_name] = "Must be a whole number"
            elif value < 0:
                errors[field_name] = "Cannot be negative"
            elif value > MAX_COUNT:
                errors[field_name] = f"Cannot exceed {MAX_COUNT}"

        if errors:
            raise ValidationError(errors)

    @property
    def rounded_price(self) -> Decimal:
        """Price quantized to cents."""
        return self.unit_price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def to_values(self) -> dict[str, object]:
        """Column values for an INSERT or UPDATE.

        Returns:
            Mapping of column name to value.
        """
        return {
            "name": self.name.strip(),
            "barcode": self.barcode or None,
            "category_id": self.category_id or None,
            "description": self.description or None,
            "unit_price": self.rounded_price,
            "stock_quantity": self.stock_quantity,
            "reorder_level": self.reorder_level,
        }
