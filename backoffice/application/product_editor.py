"""Product editor workflow.

Collects and validates one product's fields, then submits a create or
update through the catalog port. The draft is private to the editor
until a submit succeeds, and is discarded on close.
"""

import re
from dataclasses import asdict, dataclass, field
from decimal import Decimal

import structlog

from backoffice.application.ports import CatalogPort
from backoffice.catalog.service import CategoryRecord, ProductListing
from backoffice.domain.exceptions import DomainError, StorageError, ValidationError
from backoffice.domain.state_machines import EditorMode, validate_editor_transition
from backoffice.domain.value_objects import (
    DEFAULT_REORDER_LEVEL,
    MAX_COUNT,
    MAX_UNIT_PRICE,
    Notice,
    ProductDraft,
)

logger = structlog.get_logger()

# ASCII digits only, with an optional sign so negatives get their own message
_INT_PATTERN = re.compile(r"-?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")


# ============================================================================
# Form State
# ============================================================================


@dataclass
class ProductForm:
    """Editable text values of the product form.

    Numeric fields are kept as text exactly as typed and only parsed
    on submit.
    """

    name: str = ""
    barcode: str = ""
    category_id: str = ""
    description: str = ""
    unit_price: str = ""
    stock_quantity: str = ""
    reorder_level: str = str(DEFAULT_REORDER_LEVEL)

    @classmethod
    def defaults(cls) -> "ProductForm":
        """Blank form for a new product."""
        return cls()

    @classmethod
    def from_product(cls, product: ProductListing) -> "ProductForm":
        """Form seeded verbatim from an existing product.

        Args:
            product: Product being edited.

        Returns:
            Populated form.
        """
        return cls(
            name=product.name,
            barcode=product.barcode or "",
            category_id=product.category_id or "",
            description=product.description or "",
            unit_price=str(product.unit_price),
            stock_quantity=str(product.stock_quantity),
            reorder_level=str(product.reorder_level),
        )

    def to_draft(self) -> ProductDraft:
        """Parse the form into typed product values.

        Returns:
            Validated draft.

        Raises:
            ValidationError: With one entry per field that failed to parse.
        """
        errors: dict[str, str] = {}

        if not self.name.strip():
            errors["name"] = "Name is required"

        unit_price = _parse_decimal(self.unit_price)
        if unit_price is None:
            errors["unit_price"] = "Unit price must be a number"
        elif unit_price < 0:
            errors["unit_price"] = "Unit price cannot be negative"
        elif unit_price > MAX_UNIT_PRICE:
            errors["unit_price"] = f"Unit price cannot exceed {MAX_UNIT_PRICE}"

        stock_quantity = _parse_int(self.stock_quantity)
        if stock_quantity is None:
            errors["stock_quantity"] = "Stock quantity must be a whole number"
        elif stock_quantity < 0:
            errors["stock_quantity"] = "Stock quantity cannot be negative"
        elif stock_quantity > MAX_COUNT:
            errors["stock_quantity"] = f"Stock quantity cannot exceed {MAX_COUNT}"

        reorder_level = _parse_int(self.reorder_level)
        if reorder_level is None:
            errors["reorder_level"] = "Reorder level must be a whole number"
        elif reorder_level < 0:
            errors["reorder_level"] = "Reorder level cannot be negative"
        elif reorder_level > MAX_COUNT:
            errors["reorder_level"] = f"Reorder level cannot exceed {MAX_COUNT}"

        if errors:
            raise ValidationError(errors)

        draft = ProductDraft(
            name=self.name.strip(),
            unit_price=unit_price,
            stock_quantity=stock_quantity,
            reorder_level=reorder_level,
            barcode=self.barcode.strip() or None,
            category_id=self.category_id or None,
            description=self.description.strip() or None,
        )
        draft.validate()
        return draft


def _parse_decimal(text: str) -> Decimal | None:
    """Parse plain decimal notation such as "2.50", or None."""
    text = text.strip()
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    return Decimal(text)


def _parse_int(text: str) -> int | None:
    """Parse a plain base-10 integer, or None."""
    text = text.strip()
    if not _INT_PATTERN.fullmatch(text):
        return None
    return int(text)


# ============================================================================
# Result Types
# ============================================================================


@dataclass
class SubmitResult:
    """Outcome of submitting the editor.

    Attributes:
        done: True when the write succeeded and the editor closed.
        notice: Feedback to show, if any.
        product: The stored product after a successful write.
        field_errors: Per-field validation messages when blocked locally.
        discarded: True when the response arrived after the editor closed.
    """

    done: bool
    notice: Notice | None = None
    product: ProductListing | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    discarded: bool = False


# ============================================================================
# Product Editor
# ============================================================================


class ProductEditor:
    """Modal form workflow for creating or editing one product.

    Example usage:
        editor = ProductEditor(service)
        await editor.open_for_create()
        editor.set_field("name", "Milk 1L")
        editor.set_field("unit_price", "2.50")
        editor.set_field("stock_quantity", "40")
        result = await editor.submit()
        if result.done:
            ...  # reload the product list
    """

    FIELDS = tuple(asdict(ProductForm()).keys())

    def __init__(self, service: CatalogPort, editor_id: str = "product-editor") -> None:
        """Initialize a closed editor.

        Args:
            service: Catalog port used for category lookup and writes.
            editor_id: Identifier used in logs and errors.
        """
        self.service = service
        self.editor_id = editor_id
        self.mode = EditorMode.CLOSED
        self.form: ProductForm | None = None
        self.product: ProductListing | None = None
        self.categories: list[CategoryRecord] = []
        self.field_errors: dict[str, str] = {}
        self.is_submitting = False
        # Bumped on every open/close so late responses can be recognised
        self._session = 0

    @property
    def is_open(self) -> bool:
        """Check if a draft is active."""
        return self.mode.is_open()

    @property
    def title(self) -> str:
        """Dialog title for the current mode."""
        return "Edit Product" if self.mode == EditorMode.EDIT else "Add New Product"

    async def open_for_create(self) -> Notice | None:
        """Open the editor with default values.

        Returns:
            Error notice if the category list could not be loaded.
        """
        return await self._open(EditorMode.CREATE, None)

    async def open_for_edit(self, product: ProductListing) -> Notice | None:
        """Open the editor bound to an existing product.

        Args:
            product: Product whose values seed the form.

        Returns:
            Error notice if the category list could not be loaded.
        """
        return await self._open(EditorMode.EDIT, product)

    def set_field(self, name: str, value: str) -> None:
        """Change one form field.

        Args:
            name: Field name (one of FIELDS).
            value: New text value.

        Raises:
            DomainError: If the editor is closed.
            KeyError: If the field does not exist.
        """
        if self.form is None:
            raise DomainError("Product editor is not open", details={"editor_id": self.editor_id})
        if name not in self.FIELDS:
            raise KeyError(name)
        setattr(self.form, name, value)
        self.field_errors.pop(name, None)

    async def submit(self) -> SubmitResult:
        """Validate the draft and write it.

        Invalid input is flagged per field without calling the catalog.
        A storage failure leaves the form open and populated. While a
        write is in flight further submits are ignored.

        Returns:
            Submit outcome.

        Raises:
            DomainError: If the editor is closed.
        """
        if self.form is None:
            raise DomainError("Product editor is not open", details={"editor_id": self.editor_id})
        if self.is_submitting:
            logger.info("Submit already in progress", editor_id=self.editor_id)
            return SubmitResult(done=False)

        try:
            draft = self.form.to_draft()
        except ValidationError as e:
            self.field_errors = e.field_errors
            logger.info("Product form rejected", editor_id=self.editor_id, fields=sorted(e.field_errors))
            return SubmitResult(done=False, field_errors=e.field_errors)

        session = self._session
        bound = self.product
        self.field_errors = {}
        self.is_submitting = True

        try:
            if bound is not None:
                stored = await self.service.update_product(bound.id, draft)
            else:
                stored = await self.service.create_product(draft)
        except ValidationError as e:
            if self._is_stale(session):
                return self._discard(session)
            self.is_submitting = False
            self.field_errors = e.field_errors
            return SubmitResult(done=False, field_errors=e.field_errors)
        except StorageError as e:
            if self._is_stale(session):
                return self._discard(session)
            self.is_submitting = False
            return SubmitResult(done=False, notice=Notice.error("Error", e.message))

        if self._is_stale(session):
            return self._discard(session)

        verb = "updated" if bound is not None else "created"
        notice = Notice.success(
            f"Product {verb}",
            f"The product has been {verb} successfully.",
        )
        self._reset()
        return SubmitResult(done=True, notice=notice, product=stored)

    def close(self) -> None:
        """Discard the draft. Has no effect on storage."""
        if not self.is_open:
            return
        validate_editor_transition(self.editor_id, self.mode, EditorMode.CLOSED)
        logger.debug("Product editor closed", editor_id=self.editor_id, mode=self.mode.value)
        self._reset()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _open(self, mode: EditorMode, product: ProductListing | None) -> Notice | None:
        # Opening over an active draft replaces it
        self.close()
        validate_editor_transition(self.editor_id, self.mode, mode)

        self._session += 1
        session = self._session
        self.mode = mode
        self.product = product
        self.form = ProductForm.from_product(product) if product else ProductForm.defaults()
        self.categories = []
        self.field_errors = {}
        self.is_submitting = False

        # Categories are re-fetched on every open so new ones show up
        try:
            categories = await self.service.list_categories()
        except StorageError as e:
            if self._is_stale(session):
                return None
            logger.warning("Category lookup failed", editor_id=self.editor_id, error=e.message)
            return Notice.error("Error loading categories", e.message)

        if self._is_stale(session):
            logger.debug("Discarding stale category list", editor_id=self.editor_id)
            return None
        self.categories = categories
        return None

    def _is_stale(self, session: int) -> bool:
        return session != self._session

    def _discard(self, session: int) -> SubmitResult:
        logger.info("Discarding late submit response", editor_id=self.editor_id, session=session)
        return SubmitResult(done=False, discarded=True)

    def _reset(self) -> None:
        self._session += 1
        self.mode = EditorMode.CLOSED
        self.form = None
        self.product = None
        self.categories = []
        self.field_errors = {}
        self.is_submitting = False
