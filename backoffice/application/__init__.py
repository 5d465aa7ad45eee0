"""Application layer - back-office workflows.

Exports the catalog view and product editor workflows.
"""

from backoffice.application.catalog_view import (
    COLUMNS,
    CatalogRow,
    CatalogView,
    DeleteResult,
    EditorOutcome,
    ViewState,
    render_row,
    render_table,
)
from backoffice.application.ports import CatalogPort, ConfirmGate, SignOutAction
from backoffice.application.product_editor import ProductEditor, ProductForm, SubmitResult

__all__ = [
    # Catalog view
    "COLUMNS",
    "CatalogRow",
    "CatalogView",
    "DeleteResult",
    "EditorOutcome",
    "ViewState",
    "render_row",
    "render_table",
    # Product editor
    "ProductEditor",
    "ProductForm",
    "SubmitResult",
    # Ports
    "CatalogPort",
    "ConfirmGate",
    "SignOutAction",
]
