"""Domain layer - value objects, state machines and exceptions.

- **Value Objects**: ProductDraft, Notice, StockStatus
- **State Machines**: ViewStatus, EditorMode
- **Exceptions**: ValidationError, StorageError, NotFoundError

Example usage:
    from backoffice.domain import StockStatus, stock_status

    stock_status(stock_quantity=5, reorder_level=10)  # StockStatus.LOW_STOCK
"""

from backoffice.domain.base import ValueObject
from backoffice.domain.exceptions import (
    DomainError,
    InvalidStateTransitionError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from backoffice.domain.state_machines import (
    EditorMode,
    ViewStatus,
    validate_editor_transition,
    validate_view_transition,
)
from backoffice.domain.value_objects import (
    DEFAULT_REORDER_LEVEL,
    Notice,
    NoticeKind,
    ProductDraft,
    StockStatus,
    stock_status,
)

__all__ = [
    # Base
    "ValueObject",
    # Exceptions
    "DomainError",
    "InvalidStateTransitionError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
    # State machines
    "EditorMode",
    "ViewStatus",
    "validate_editor_transition",
    "validate_view_transition",
    # Value objects
    "DEFAULT_REORDER_LEVEL",
    "Notice",
    "NoticeKind",
    "ProductDraft",
    "StockStatus",
    "stock_status",
]
