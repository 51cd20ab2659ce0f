"""
Supabase client factory.

The storefront reads the catalog through a single Supabase client built
from settings. The client is created once and handed to repositories
explicitly (see api.dependencies), so tests can pass a fake store instead.
"""

from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from config.settings import get_settings


class SupabaseClientError(Exception):
    """Raised when Supabase client cannot be created."""
    pass


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Get the cached Supabase client instance.

    Returns:
        Client: The Supabase client instance

    Raises:
        SupabaseClientError: If client cannot be created
    """
    try:
        settings = get_settings()
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        raise SupabaseClientError(f"Failed to create Supabase client: {e}") from e


def get_supabase_client_optional() -> Optional[Client]:
    """
    Get the Supabase client, returning None if it cannot be created.

    Used by health checks to report a missing configuration instead of failing.
    """
    try:
        return get_supabase_client()
    except SupabaseClientError:
        return None


# Type alias for cleaner type hints
SupabaseClient = Client
