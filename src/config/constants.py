"""
Application constants and catalog query configuration.

These are values that don't change based on environment but are
referenced across the codebase.
"""

from dataclasses import dataclass


SERVICE_NAME = "storefront-api"


# =============================================================================
# Supabase Tables
# =============================================================================

PRODUCTS_TABLE = "products"
CART_ITEMS_TABLE = "cart_items"


# =============================================================================
# Catalog Query Configuration
# =============================================================================

@dataclass(frozen=True)
class CatalogQueryConfig:
    """Select clauses and limits for product reads."""

    # Every product read embeds its category, images and variants
    PRODUCT_SELECT: str = (
        "*, "
        "category:categories(name, slug), "
        "images:product_images(*), "
        "variants:product_variants(*)"
    )

    # Inner join so the category slug filter drops unmatched products
    CATEGORY_FILTERED_SELECT: str = (
        "*, "
        "category:categories!inner(name, slug), "
        "images:product_images(*), "
        "variants:product_variants(*)"
    )

    # Products rated at least this high are recommended even when not on sale
    RECOMMENDED_MIN_RATING: float = 4.0

    RELATED_LIMIT: int = 4
    RECOMMENDED_LIMIT: int = 6


DEFAULT_QUERY_CONFIG = CatalogQueryConfig()


# =============================================================================
# Presentation Defaults
# =============================================================================

PLACEHOLDER_IMAGE_URL = "/placeholder.svg"
DEFAULT_CURRENCY_SYMBOL = "Rs."

# Cards show this rating for products that have not been rated yet
DEFAULT_CARD_RATING = 4.0

DEFAULT_CATEGORY_NAME = "General"
DEFAULT_SWATCH_COLOR = "#000000"
