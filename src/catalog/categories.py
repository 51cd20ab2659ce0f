"""
Storefront category tables.

URLs use short category keys (``/products/men``) while the categories
table is keyed by slug (``mens-t-shirts``). Three static tables hang off
the URL key: the storage slug, the subcategory filter chips shown on the
listing page, and the page title.

Usage:
    from catalog.categories import map_category_to_slug, subcategory_filters

    map_category_to_slug("men")        # "mens-t-shirts"
    map_category_to_slug("night-wear") # "night-wear" (already a slug)
    subcategory_filters("shapewear")   # ["All", "Lycra Cotton", ...]
"""

from typing import Dict, List, Optional


ALL_CATEGORY = "all"
ALL_FILTER = "All"
ALL_PRODUCTS_TITLE = "All Products"


# URL category key -> categories.slug
CATEGORY_SLUGS: Dict[str, str] = {
    "men": "mens-t-shirts",
    "men-tshirts": "mens-t-shirts",
    "men-bottomwear": "mens-bottomwear",
    "women": "womens-leggings",
    "women-leggings": "womens-leggings",
    "shapewear": "saree-shapewear",
    "nightwear": "night-wear",
}

# URL category key -> filter chips, "All" first
SUBCATEGORY_FILTERS: Dict[str, List[str]] = {
    "men": [ALL_FILTER, "T-Shirts", "Round Neck", "V-Neck", "Polo", "Track Pants", "Shorts"],
    "men-tshirts": [ALL_FILTER, "Round Neck", "V-Neck", "Polo", "Long Sleeve", "Sleeveless"],
    "men-bottomwear": [ALL_FILTER, "Track Pants", "Shorts"],
    "women": [ALL_FILTER, "Leggings", "Shapewear", "Night Wear", "3/4 Leggings"],
    "women-leggings": [ALL_FILTER, "Flat Ankle", "Full Length", "Churidhar", "Shimmer", "3/4 Length"],
    "shapewear": [ALL_FILTER, "Lycra Cotton", "Polyester", "Shimmer"],
    "nightwear": [ALL_FILTER, "Night T-Shirts", "Shorts"],
}

# URL category key -> page title
CATEGORY_DISPLAY_NAMES: Dict[str, str] = {
    "men": "Men's Collection",
    "men-tshirts": "Men's T-Shirts",
    "men-bottomwear": "Men's Bottomwear",
    "women": "Women's Collection",
    "women-leggings": "Women's Leggings",
    "shapewear": "Saree Shapewear",
    "nightwear": "Night Wear",
    ALL_CATEGORY: ALL_PRODUCTS_TITLE,
}


def is_all_category(url_category: Optional[str]) -> bool:
    """True when the URL segment means "no category filter"."""
    return not url_category or url_category.strip().lower() == ALL_CATEGORY


def map_category_to_slug(url_category: str) -> str:
    """
    Translate a URL category key to its categories.slug.

    Unknown keys pass through unchanged, so canonical slugs can be used
    in URLs directly.
    """
    return CATEGORY_SLUGS.get(url_category, url_category)


def subcategory_filters(url_category: Optional[str]) -> List[str]:
    """Filter chips for a category; unknown categories only get "All"."""
    return list(SUBCATEGORY_FILTERS.get(url_category or ALL_CATEGORY, [ALL_FILTER]))


def display_name(url_category: Optional[str]) -> str:
    """Page title for a category, falling back to the raw key."""
    if not url_category:
        return ALL_PRODUCTS_TITLE
    return CATEGORY_DISPLAY_NAMES.get(url_category, url_category)


def known_categories() -> List[str]:
    """URL category keys in table order."""
    return list(CATEGORY_SLUGS)
