"""
Services module for storefront business logic.

Assembles catalog pages and handles the add-to-cart flow.
"""

from services.storefront import (
    BrowsingSession,
    ProductCollection,
    ProductListing,
    StorefrontService,
)
from services.cart import CartAddition, CartError, CartService, InvalidVariantError

__all__ = [
    "BrowsingSession",
    "ProductCollection",
    "ProductListing",
    "StorefrontService",
    "CartAddition",
    "CartError",
    "CartService",
    "InvalidVariantError",
]
