"""Domain exceptions.

All domain-level errors raised by the catalog. Input problems are
detected locally and never reach storage; storage problems are wrapped
so callers never see driver-specific exceptions.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "CatalogView").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Input Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when product input fails local validation.

    Carries one message per offending field so forms can flag
    each field individually.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        """Initialize validation error.

        Args:
            field_errors: Mapping of field name to error message.
        """
        fields = ", ".join(sorted(field_errors))
        super().__init__(
            f"Invalid product fields: {fields}",
            details={"field_errors": dict(field_errors)},
        )
        self.field_errors = dict(field_errors)


# ============================================================================
# Storage Errors
# ============================================================================


class StorageError(DomainError):
    """Raised when the storage boundary reports a failure.

    Covers connectivity problems, constraint violations and
    permission errors.
    """

    pass


class NotFoundError(StorageError):
    """Raised when an operation targets a record that no longer exists."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of record (e.g., "Product").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type} {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
