"""
Catalog data access and filtering.

- models: Product, ProductImage, ProductVariant, CategoryRef
- categories: URL category key tables (slug, filter chips, titles)
- repository: Supabase-backed ProductRepository returning FetchResult
- filters: subcategory chip filtering over fetched products
- view_models: cards, detail pages, facets and price labels
- navigation: generation counter for dropping stale fetches
"""

from catalog.categories import display_name, map_category_to_slug, subcategory_filters
from catalog.filters import filter_by_subcategory_token
from catalog.models import Product, ProductImage, ProductVariant
from catalog.repository import ProductRepository
from catalog.results import FetchResult, FetchStatus

__all__ = [
    "Product",
    "ProductImage",
    "ProductVariant",
    "ProductRepository",
    "FetchResult",
    "FetchStatus",
    "map_category_to_slug",
    "subcategory_filters",
    "display_name",
    "filter_by_subcategory_token",
]
