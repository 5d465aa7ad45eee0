"""Catalog view workflow.

Holds a read-only snapshot of the product list, projects it through
the search filter, renders table rows and orchestrates the add, edit
and delete actions. Every state change is an explicit transition on a
ViewState value; the snapshot is only ever replaced wholesale.
"""

from dataclasses import dataclass, field, replace

import structlog

from backoffice.application.ports import CatalogPort, ConfirmGate, SignOutAction
from backoffice.application.product_editor import ProductEditor, SubmitResult
from backoffice.catalog.filtering import filter_products
from backoffice.catalog.service import ProductListing
from backoffice.domain.exceptions import DomainError, NotFoundError, StorageError
from backoffice.domain.state_machines import ViewStatus, validate_view_transition
from backoffice.domain.value_objects import Notice
from backoffice.infrastructure.config import settings

logger = structlog.get_logger()

DELETE_PROMPT = "Are you sure you want to delete this product?"

COLUMNS = ("Name", "Barcode", "Category", "Price", "Stock", "Status", "Actions")


# ============================================================================
# View State
# ============================================================================


@dataclass(frozen=True)
class ViewState:
    """Immutable state of a catalog view.

    Attributes:
        status: Current lifecycle state.
        products: Snapshot from the last successful load, name-ascending.
        query: Current search text.
        load_error: Message of the failed load while in LOAD_ERROR.
        notice: Feedback from the last action, if any.
    """

    status: ViewStatus = ViewStatus.LOADING
    products: tuple[ProductListing, ...] = ()
    query: str = ""
    load_error: str | None = None
    notice: Notice | None = None

    @property
    def visible_products(self) -> list[ProductListing]:
        """Snapshot projected through the current query."""
        return filter_products(self.products, self.query)


@dataclass(frozen=True)
class CatalogRow:
    """One rendered table row."""

    id: str
    name: str
    barcode: str
    category: str
    price: str
    stock: str
    status: str
    actions: tuple[str, ...] = ("Edit", "Delete")

    def cells(self) -> tuple[str, ...]:
        """Cell texts in column order, actions joined."""
        return (
            self.name,
            self.barcode,
            self.category,
            self.price,
            self.stock,
            self.status,
            " / ".join(self.actions),
        )


def render_row(product: ProductListing, currency_symbol: str = "$") -> CatalogRow:
    """Render one product as table cells.

    Args:
        product: Product to render.
        currency_symbol: Prefix for the price column.

    Returns:
        Rendered row; status is derived from the product's own values.
    """
    return CatalogRow(
        id=product.id,
        name=product.name,
        barcode=product.barcode or "—",
        category=product.category_name or "Uncategorized",
        price=f"{currency_symbol}{product.unit_price:.2f}",
        stock=str(product.stock_quantity),
        status=product.stock_status.label,
    )


def render_table(state: ViewState, currency_symbol: str = "$") -> list[CatalogRow]:
    """Render the visible rows of a view state.

    Args:
        state: View state to render.
        currency_symbol: Prefix for the price column.

    Returns:
        Rows in display order.
    """
    return [render_row(p, currency_symbol) for p in state.visible_products]


# ============================================================================
# Result Types
# ============================================================================


@dataclass
class DeleteResult:
    """Outcome of a delete action.

    Attributes:
        confirmed: Whether the confirmation gate said yes.
        deleted: Whether storage removed the product.
        notice: Feedback to show, if any.
    """

    confirmed: bool
    deleted: bool = False
    notice: Notice | None = None


@dataclass
class EditorOutcome:
    """Outcome of finishing the editor from the view."""

    submit: SubmitResult | None = None
    notices: list[Notice] = field(default_factory=list)


# ============================================================================
# Catalog View
# ============================================================================


class CatalogView:
    """Searchable product table with add/edit/delete actions.

    Example usage:
        view = CatalogView(service)
        await view.mount()
        view.set_query("milk")
        for row in view.render():
            print(row.cells())
    """

    def __init__(
        self,
        service: CatalogPort,
        editor: ProductEditor | None = None,
        sign_out: SignOutAction | None = None,
        view_id: str = "catalog-view",
    ) -> None:
        """Initialize a view in the LOADING state.

        Args:
            service: Catalog port for listing and deleting.
            editor: Product editor; one is created on the same port if omitted.
            sign_out: Sign-out action from the authentication collaborator.
            view_id: Identifier used in logs and errors.
        """
        self.service = service
        self.editor = editor or ProductEditor(service)
        self.view_id = view_id
        self.state = ViewState()
        self._sign_out = sign_out
        self._mounted = False
        # Bumped per load so a superseded load cannot overwrite a newer one
        self._load_generation = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        """Check if the view still accepts responses."""
        return self._mounted

    async def mount(self) -> Notice | None:
        """Mount the view and load the product list.

        Returns:
            Error notice if the initial load failed.
        """
        self._mounted = True
        return await self.load()

    def unmount(self) -> None:
        """Stop accepting responses. Outstanding requests are not cancelled."""
        self._mounted = False
        self.editor.close()
        logger.debug("Catalog view unmounted", view_id=self.view_id)

    async def load(self) -> Notice | None:
        """Fetch the product list and replace the snapshot.

        Returns:
            Error notice if the fetch failed, otherwise None.
        """
        if not self._mounted:
            return None

        self._transition(ViewStatus.LOADING)
        self._load_generation += 1
        generation = self._load_generation

        try:
            products = await self.service.list_products()
        except StorageError as e:
            if self._is_stale(generation):
                return None
            notice = Notice.error("Error loading products", e.message)
            # The list is emptied on a failed load
            self._transition(
                ViewStatus.LOAD_ERROR, products=(), load_error=e.message, notice=notice
            )
            logger.warning("Product list load failed", view_id=self.view_id, error=e.message)
            return notice

        if self._is_stale(generation):
            return None
        self._transition(ViewStatus.READY, products=tuple(products), load_error=None)
        return None

    # ------------------------------------------------------------------
    # Filtering and rendering
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        """Change the search text. Never re-fetches.

        Args:
            query: User-entered search text.
        """
        self.state = replace(self.state, query=query)

    @property
    def visible_products(self) -> list[ProductListing]:
        """Products matching the current query, in snapshot order."""
        return self.state.visible_products

    def render(self) -> list[CatalogRow]:
        """Render the visible rows."""
        return render_table(self.state, settings.currency_symbol)

    def find_product(self, product_id: str) -> ProductListing | None:
        """Look a product up in the current snapshot.

        Args:
            product_id: Product ID.

        Returns:
            The product, or None if the snapshot does not hold it.
        """
        for product in self.state.products:
            if product.id == product_id:
                return product
        return None

    # ------------------------------------------------------------------
    # Editor actions
    # ------------------------------------------------------------------

    async def open_create(self) -> Notice | None:
        """Open the editor for a new product.

        Returns:
            Error notice if the category list could not be loaded.
        """
        return await self.editor.open_for_create()

    async def open_edit(self, product_id: str) -> Notice | None:
        """Open the editor bound to a product from the snapshot.

        Args:
            product_id: Product ID.

        Returns:
            Error notice if the category list could not be loaded.

        Raises:
            NotFoundError: If the snapshot does not hold the product.
        """
        product = self.find_product(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return await self.editor.open_for_edit(product)

    async def submit_editor(self) -> EditorOutcome:
        """Submit the editor and reload the list once it completes.

        Returns:
            Submit result plus every notice to show.
        """
        result = await self.editor.submit()
        outcome = EditorOutcome(submit=result)
        if result.notice is not None:
            outcome.notices.append(result.notice)
        if result.done and self._mounted:
            load_notice = await self.load()
            if load_notice is not None:
                outcome.notices.append(load_notice)
        return outcome

    async def cancel_editor(self) -> EditorOutcome:
        """Close the editor without saving and reload the list.

        Returns:
            Notices from the reload, if any.
        """
        self.editor.close()
        outcome = EditorOutcome()
        load_notice = await self.load()
        if load_notice is not None:
            outcome.notices.append(load_notice)
        return outcome

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self, product_id: str, confirm: ConfirmGate) -> DeleteResult:
        """Delete a product after an explicit confirmation.

        On failure the snapshot is left as it was; nothing is removed
        optimistically.

        Args:
            product_id: Product ID.
            confirm: Yes/no gate receiving the prompt text.

        Returns:
            Delete outcome.
        """
        if not confirm(DELETE_PROMPT):
            return DeleteResult(confirmed=False)

        try:
            await self.service.delete_product(product_id)
        except StorageError as e:
            if not self._mounted:
                return DeleteResult(confirmed=True)
            # NotFoundError lands here too; the next load shows the true state
            logger.warning(
                "Product delete failed",
                view_id=self.view_id,
                product_id=product_id,
                error=e.message,
            )
            notice = Notice.error("Error deleting product", e.message)
            self.state = replace(self.state, notice=notice)
            return DeleteResult(confirmed=True, notice=notice)

        if not self._mounted:
            return DeleteResult(confirmed=True, deleted=True)

        notice = Notice.success("Product deleted", "The product has been removed successfully.")
        self.state = replace(self.state, notice=notice)
        await self.load()
        return DeleteResult(confirmed=True, deleted=True, notice=notice)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def sign_out(self) -> None:
        """Sign the actor out and unmount the view.

        Raises:
            DomainError: If no sign-out action was provided.
        """
        if self._sign_out is None:
            raise DomainError("No sign-out action configured", details={"view_id": self.view_id})
        await self._sign_out()
        self.unmount()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transition(self, target: ViewStatus, **changes: object) -> None:
        validate_view_transition(self.view_id, self.state.status, target)
        logger.debug(
            "Catalog view transition",
            view_id=self.view_id,
            from_status=self.state.status.value,
            to_status=target.value,
        )
        self.state = replace(self.state, status=target, **changes)

    def _is_stale(self, generation: int) -> bool:
        stale = not self._mounted or generation != self._load_generation
        if stale:
            logger.debug("Discarding stale product list", view_id=self.view_id, generation=generation)
        return stale
