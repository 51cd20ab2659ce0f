"""
Client-side subcategory filtering.

Subcategory chips ("Polo", "V-Neck", "Shimmer") are not stored as a
column the listing can query on; a product matches a chip when the chip
text appears in its name or description. Matching is a linear scan over
an already-fetched listing.
"""

from typing import Iterable, List, Optional

from catalog.categories import ALL_CATEGORY
from catalog.models import Product


def is_all_token(token: Optional[str]) -> bool:
    """Empty tokens and "all" (any case) select every product."""
    return not token or token.strip().lower() == ALL_CATEGORY


def matches_token(product: Product, token: str) -> bool:
    """Case-insensitive substring match on name or description."""
    needle = token.lower()
    if needle in product.name.lower():
        return True
    return product.description is not None and needle in product.description.lower()


def filter_by_subcategory_token(
    products: Iterable[Product],
    token: Optional[str],
) -> List[Product]:
    """
    Narrow a product listing to a subcategory chip.

    Args:
        products: Fetched products, in display order
        token: Chip text from the ``subcategory`` query parameter

    Returns:
        A new list; every product when the token is empty or "all",
        otherwise the products whose name or description contains
        the token, in their original order.
    """
    if is_all_token(token):
        return list(products)
    return [p for p in products if matches_token(p, token)]
