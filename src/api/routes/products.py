"""
Product browsing routes.

Public endpoints; no authentication required. Listings always answer
200 and report read problems in their ``status``/``degraded`` fields.
Single-product pages answer 404 for unknown products and 503 when the
catalog cannot be read.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_storefront_service
from catalog.exceptions import CatalogUnavailableError, ProductNotFoundError
from catalog.view_models import ProductDetail
from services.storefront import ProductCollection, ProductListing, StorefrontService


router = APIRouter(prefix="/api/products", tags=["Products"])


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, ProductNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Catalog is temporarily unavailable",
    )


@router.get("", response_model=ProductListing, summary="List products")
async def list_products(
    category: Optional[str] = Query(None, description="Category key (men, women-leggings, ...) or slug"),
    subcategory: Optional[str] = Query(None, description="Subcategory filter chip, e.g. 'Polo'"),
    product: Optional[str] = Query(None, description="Product id to preselect"),
    storefront: StorefrontService = Depends(get_storefront_service),
) -> ProductListing:
    """
    Listing page for a category, optionally narrowed by a subcategory chip.

    Without a category (or with ``all``) every active product is listed.
    """
    return await storefront.list_products(
        category=category,
        subcategory=subcategory,
        selected_product_id=product,
    )


@router.get("/best-selling", response_model=ProductCollection, summary="Best selling products")
async def best_selling(
    storefront: StorefrontService = Depends(get_storefront_service),
) -> ProductCollection:
    """Hot-sale products, newest first."""
    return await storefront.best_selling()


@router.get("/recommended", response_model=ProductCollection, summary="Recommended products")
async def recommended(
    limit: Optional[int] = Query(None, ge=1, le=50, description="Number of products"),
    storefront: StorefrontService = Depends(get_storefront_service),
) -> ProductCollection:
    """Hot-sale or highly rated products, best rated first."""
    return await storefront.recommended(limit)


@router.get("/id/{product_id}", response_model=ProductDetail, summary="Get product by id")
async def get_product_by_id(
    product_id: str,
    storefront: StorefrontService = Depends(get_storefront_service),
) -> ProductDetail:
    try:
        return await storefront.product_detail_by_id(product_id)
    except (ProductNotFoundError, CatalogUnavailableError) as e:
        raise _http_error(e)


@router.get("/{slug}", response_model=ProductDetail, summary="Get product by slug")
async def get_product(
    slug: str,
    storefront: StorefrontService = Depends(get_storefront_service),
) -> ProductDetail:
    """Product page with gallery, facets and related products."""
    try:
        return await storefront.product_detail(slug)
    except (ProductNotFoundError, CatalogUnavailableError) as e:
        raise _http_error(e)
