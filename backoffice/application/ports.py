"""Ports the back-office workflows depend on.

CatalogService satisfies CatalogPort structurally; tests substitute
fakes with the same shape.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from backoffice.catalog.service import CategoryRecord, ProductListing
from backoffice.domain.value_objects import ProductDraft


class CatalogPort(Protocol):
    """Catalog operations used by the view and the editor."""

    async def list_categories(self) -> list[CategoryRecord]:
        """List categories sorted by name."""
        ...

    async def list_products(self) -> list[ProductListing]:
        """List products joined with category names, sorted by name."""
        ...

    async def create_product(self, draft: ProductDraft) -> ProductListing:
        """Insert a product."""
        ...

    async def update_product(self, product_id: str, draft: ProductDraft) -> ProductListing:
        """Overwrite a product."""
        ...

    async def delete_product(self, product_id: str) -> None:
        """Delete a product."""
        ...


# Yes/no gate shown before destructive actions; receives the prompt text
ConfirmGate = Callable[[str], bool]

# Sign-out action provided by the authentication collaborator
SignOutAction = Callable[[], Awaitable[None]]
