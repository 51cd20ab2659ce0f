"""
Category navigation routes.

Exposes the static category tables so the storefront can render its
navigation, page titles and filter chips.
"""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from catalog.categories import (
    display_name,
    known_categories,
    map_category_to_slug,
    subcategory_filters,
)


router = APIRouter(prefix="/api/categories", tags=["Categories"])


class CategoryNavigation(BaseModel):
    key: str
    slug: str
    title: str
    filters: List[str]


def describe_category(key: str) -> CategoryNavigation:
    return CategoryNavigation(
        key=key,
        slug=map_category_to_slug(key),
        title=display_name(key),
        filters=subcategory_filters(key),
    )


@router.get("", response_model=List[CategoryNavigation], summary="List categories")
async def list_categories() -> List[CategoryNavigation]:
    return [describe_category(key) for key in known_categories()]


@router.get("/{category}", response_model=CategoryNavigation, summary="Describe a category")
async def get_category(category: str) -> CategoryNavigation:
    """Unknown keys are treated as storage slugs with only the "All" chip."""
    return describe_category(category)
