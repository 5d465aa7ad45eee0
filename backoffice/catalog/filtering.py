"""Text filtering over a product snapshot.

Filtering is a pure projection: it never mutates, reorders or
re-fetches the list it is given.
"""

from collections.abc import Sequence

from backoffice.catalog.service import ProductListing


def matches_query(product: ProductListing, query: str) -> bool:
    """Check whether a product matches a search query.

    The query matches case-insensitively as a substring of the name,
    the barcode (when present) or the category name (when present).

    Args:
        product: Product to test.
        query: User-entered search text.

    Returns:
        True if the product should be shown.
    """
    needle = query.lower()
    if needle in product.name.lower():
        return True
    if product.barcode and needle in product.barcode.lower():
        return True
    if product.category_name and needle in product.category_name.lower():
        return True
    return False


def filter_products(
    products: Sequence[ProductListing],
    query: str | None,
) -> list[ProductListing]:
    """Project a product list onto the rows matching a query.

    An empty or missing query keeps every product. Relative order is
    preserved and the input is never modified.

    Args:
        products: Snapshot to filter.
        query: User-entered search text.

    Returns:
        New list holding the matching products in their original order.
    """
    if not query:
        return list(products)
    return [p for p in products if matches_query(p, query)]
