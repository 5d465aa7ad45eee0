"""Command-line front end for the back-office catalog.

Drives the catalog view and product editor workflows from a terminal.

Usage:
    backoffice list --search milk
    backoffice add --name "Milk 1L" --price 2.50 --stock 40 --category Dairy
    backoffice edit <product-id> --stock 5
    backoffice delete <product-id>
    backoffice stats
    backoffice seed
    backoffice serve --port 8000
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence

import uvicorn

from backoffice.application.catalog_view import COLUMNS, CatalogRow, CatalogView
from backoffice.catalog.service import CatalogService
from backoffice.domain.exceptions import DomainError
from backoffice.domain.value_objects import Notice
from backoffice.infrastructure.config import settings
from backoffice.infrastructure.database import async_session_factory, create_tables
from backoffice.infrastructure.logging import configure_logging

# CLI option name -> product form field
FORM_OPTIONS = {
    "name": "name",
    "barcode": "barcode",
    "price": "unit_price",
    "stock": "stock_quantity",
    "reorder_level": "reorder_level",
    "description": "description",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="backoffice",
        description="Manage the supermarket product catalog",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show the product table")
    list_parser.add_argument("--search", default="", help="Filter by name, barcode or category")

    add_parser = subparsers.add_parser("add", help="Create a product")
    _add_form_arguments(add_parser, required=True)

    edit_parser = subparsers.add_parser("edit", help="Update a product")
    edit_parser.add_argument("product_id", help="Product ID")
    _add_form_arguments(edit_parser, required=False)

    delete_parser = subparsers.add_parser("delete", help="Delete a product")
    delete_parser.add_argument("product_id", help="Product ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    subparsers.add_parser("stats", help="Show catalog indicators")

    seed_parser = subparsers.add_parser("seed", help="Create tables and load demo data")
    seed_parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products and categories before seeding",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Restart on code changes")

    return parser


def _add_form_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--name", required=required, help="Product name")
    parser.add_argument("--barcode", help="Barcode")
    parser.add_argument("--category", help="Category name or ID")
    parser.add_argument("--price", required=required, help="Unit price")
    parser.add_argument("--stock", required=required, help="Stock quantity")
    parser.add_argument("--reorder-level", dest="reorder_level", help="Reorder level")
    parser.add_argument("--description", help="Description")


def format_table(rows: Sequence[CatalogRow]) -> str:
    """Lay rendered rows out as a fixed-width text table.

    Args:
        rows: Rendered rows.

    Returns:
        Table text including the header line.
    """
    header = COLUMNS[:-1] + ("ID",)
    lines = [header] + [row.cells()[:-1] + (row.id,) for row in rows]
    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(line)).rstrip()
        for line in lines
    )


def format_notice(notice: Notice) -> str:
    """Format a notice as one line."""
    marker = "✗" if notice.is_error else "✓"
    if notice.description:
        return f"{marker} {notice.title}: {notice.description}"
    return f"{marker} {notice.title}"


def resolve_category(view: CatalogView, value: str) -> str | None:
    """Find a category in the editor's list by ID or case-insensitive name.

    Args:
        view: View whose editor holds the category list.
        value: Category name or ID.

    Returns:
        Category ID, or None if nothing matches.
    """
    for category in view.editor.categories:
        if category.id == value or category.name.lower() == value.lower():
            return category.id
    return None


def prompt_confirm(message: str) -> bool:
    """Ask a yes/no question on the terminal."""
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


async def run_command(
    args: argparse.Namespace,
    service: CatalogService,
    out=print,
    confirm=prompt_confirm,
) -> int:
    """Execute one parsed command against a catalog service.

    Args:
        args: Parsed arguments.
        service: Catalog service.
        out: Line printer.
        confirm: Yes/no gate used by delete.

    Returns:
        Process exit code.
    """
    if args.command == "seed":
        result = await service.seed_catalog(clear_existing=not args.no_clear)
        out(f"✓ Deleted: {result['deleted']} existing products")
        out(f"✓ Categories: {result['categories_created']}")
        out(f"✓ Products: {result['products_created']} ({result['low_stock']} low stock)")
        return 0

    if args.command == "stats":
        stats = await service.get_stats()
        out(f"Total products:   {stats.total_products}")
        out(f"Categories:       {stats.total_categories}")
        out(f"Low stock items:  {stats.low_stock_count}")
        return 0

    view = CatalogView(service)
    load_notice = await view.mount()
    if load_notice is not None:
        out(format_notice(load_notice))
        return 1

    if args.command == "list":
        view.set_query(args.search)
        out(format_table(view.render()))
        return 0

    if args.command == "delete":
        gate = (lambda _message: True) if args.yes else confirm
        result = await view.delete(args.product_id, gate)
        if not result.confirmed:
            out("Cancelled")
            return 0
        out(format_notice(result.notice))
        return 0 if result.deleted else 1

    if args.command == "add":
        open_notice = await view.open_create()
    else:
        try:
            open_notice = await view.open_edit(args.product_id)
        except DomainError as e:
            out(f"✗ {e.message}")
            return 1
    if open_notice is not None:
        out(format_notice(open_notice))

    for option, field_name in FORM_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            view.editor.set_field(field_name, value)

    if args.category is not None:
        category_id = resolve_category(view, args.category)
        if category_id is None:
            out(f"✗ Unknown category: {args.category}")
            view.editor.close()
            return 1
        view.editor.set_field("category_id", category_id)

    outcome = await view.submit_editor()
    submit = outcome.submit
    for field_name, message in sorted(submit.field_errors.items()):
        out(f"✗ {field_name}: {message}")
    for notice in outcome.notices:
        out(format_notice(notice))
    if submit.done and submit.product is not None:
        out(f"ID: {submit.product.id}")
    return 0 if submit.done else 1


async def _main(args: argparse.Namespace) -> int:
    if args.command == "seed":
        await create_tables()

    async with async_session_factory() as session:
        service = CatalogService(session)
        try:
            return await run_command(args, service)
        except DomainError as e:
            print(f"✗ {e.message}", file=sys.stderr)
            return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        uvicorn.run(
            "backoffice.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=settings.log_level.lower(),
        )
        return 0
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
