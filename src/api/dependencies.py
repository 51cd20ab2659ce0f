"""
FastAPI dependencies wiring the Supabase client into the catalog services.

Tests replace `get_db`, `get_db_optional` (and `get_settings`) through
`app.dependency_overrides` to run the routes against an in-memory store.
"""

from typing import Optional

from fastapi import Depends

from catalog.repository import ProductRepository
from catalog.sample_data import sample_products
from config.database import SupabaseClient, get_supabase_client, get_supabase_client_optional
from config.settings import Settings, get_settings
from services.cart import CartService
from services.storefront import StorefrontService


def get_db() -> SupabaseClient:
    """
    FastAPI dependency for getting the Supabase client.

    Usage:
        @router.get("/items")
        async def get_items(db: SupabaseClient = Depends(get_db)):
            ...
    """
    return get_supabase_client()


def get_db_optional() -> Optional[SupabaseClient]:
    """The Supabase client, or None when it is not configured (health checks)."""
    return get_supabase_client_optional()


def build_product_repository(db: SupabaseClient, settings: Settings) -> ProductRepository:
    fallback = sample_products() if settings.sample_data_fallback else None
    return ProductRepository(db, fallback_products=fallback)


def get_product_repository(
    db: SupabaseClient = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProductRepository:
    return build_product_repository(db, settings)


def get_product_repository_optional(
    db: Optional[SupabaseClient] = Depends(get_db_optional),
    settings: Settings = Depends(get_settings),
) -> Optional[ProductRepository]:
    if db is None:
        return None
    return build_product_repository(db, settings)


def get_storefront_service(
    repository: ProductRepository = Depends(get_product_repository),
    settings: Settings = Depends(get_settings),
) -> StorefrontService:
    return StorefrontService.from_settings(repository, settings)


def get_cart_service(
    db: SupabaseClient = Depends(get_db),
    storefront: StorefrontService = Depends(get_storefront_service),
) -> CartService:
    return CartService(db, storefront)
