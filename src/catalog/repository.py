"""
Product repository backed by Supabase.

Every read selects the product row together with its category, images
and variants in a single PostgREST request, so callers always receive
fully joined Product models.

The Supabase client is passed in by the caller; nothing here reaches for
a module-level client. Accessors are coroutines: the synchronous
postgrest request runs in a worker thread so the event loop keeps
serving other requests while the catalog answers.

Usage:
    repository = ProductRepository(get_supabase_client(), fallback_products=sample_products())

    result = await repository.fetch_by_category("mens-t-shirts")
    for product in result.items:
        ...
"""

import asyncio
from typing import Any, Callable, List, Optional, Sequence

from catalog.exceptions import DuplicateProductError
from catalog.models import Product, parse_products
from catalog.results import FetchResult
from config.constants import DEFAULT_QUERY_CONFIG, PRODUCTS_TABLE, CatalogQueryConfig
from core.logging import LoggerMixin, error_fields


QueryBuilder = Callable[[], Any]


class ProductRepository(LoggerMixin):
    """
    Read-only access to active catalog products.

    Accessors never raise. Backend and parsing failures are logged and
    returned as error results; `fetch_all_active` additionally serves
    `fallback_products` as a degraded result when they are configured.
    A limit of 0 answers an empty list without querying; a negative
    limit raises ValueError.
    """

    def __init__(
        self,
        client: Any,
        fallback_products: Optional[Sequence[Product]] = None,
        config: CatalogQueryConfig = DEFAULT_QUERY_CONFIG,
    ):
        """
        Args:
            client: Supabase client (or any object with the same query builder API)
            fallback_products: Products served when the full listing fails;
                None disables the fallback
            config: Select clauses and limits
        """
        self._client = client
        self._fallback_products = list(fallback_products) if fallback_products is not None else None
        self._config = config

    # =========================================================================
    # Query plumbing
    # =========================================================================

    def _products(self, select: Optional[str] = None):
        return self._client.table(PRODUCTS_TABLE).select(select or self._config.PRODUCT_SELECT)

    async def _execute(self, build_query: QueryBuilder) -> List[dict]:
        query = build_query()
        response = await asyncio.to_thread(query.execute)
        return response.data or []

    async def _fetch_list(
        self,
        operation: str,
        build_query: QueryBuilder,
        **log_fields: Any,
    ) -> FetchResult[List[Product]]:
        try:
            rows = await self._execute(build_query)
            products = parse_products(rows)
        except Exception as e:
            self.logger.warning(
                "Catalog read failed",
                operation=operation,
                **error_fields(e),
                **log_fields,
            )
            return FetchResult.failure(e, data=[])

        self.logger.debug("Catalog read", operation=operation, count=len(products), **log_fields)
        return FetchResult.success(products)

    @staticmethod
    def _resolve_limit(limit: Optional[int], default: int) -> int:
        """None means the configured default; a negative limit is a caller bug."""
        if limit is None:
            return default
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return limit

    async def _fetch_one(
        self,
        operation: str,
        field: str,
        value: str,
        build_query: QueryBuilder,
    ) -> FetchResult[Product]:
        try:
            # Two rows are enough to detect a broken uniqueness guarantee
            rows = await self._execute(lambda: build_query().limit(2))
            if len(rows) > 1:
                raise DuplicateProductError(field, value, len(rows))
            product = Product.model_validate(rows[0]) if rows else None
        except Exception as e:
            self.logger.warning(
                "Catalog read failed",
                operation=operation,
                **error_fields(e),
                **{field: value},
            )
            return FetchResult.failure(e)

        if product is None:
            self.logger.info("Product not found", operation=operation, **{field: value})
            return FetchResult.not_found(**{field: value})
        return FetchResult.success(product)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def fallback_enabled(self) -> bool:
        return self._fallback_products is not None

    async def check_availability(self) -> FetchResult[int]:
        """
        Check the catalog with a one-row read of active products.

        The payload is the number of rows seen (0 or 1), so health checks
        can tell an empty catalog from an unreachable one.
        """
        try:
            rows = await self._execute(
                lambda: (
                    self._client.table(PRODUCTS_TABLE)
                    .select("id")
                    .eq("is_active", True)
                    .limit(1)
                )
            )
        except Exception as e:
            self.logger.warning("Catalog availability check failed", **error_fields(e))
            return FetchResult.failure(e)
        return FetchResult.success(len(rows))

    async def fetch_all_active(self) -> FetchResult[List[Product]]:
        """All active products, newest first."""
        result = await self._fetch_list(
            "fetch_all_active",
            lambda: (
                self._products()
                .eq("is_active", True)
                .order("created_at", desc=True)
            ),
        )
        if result.is_error and self._fallback_products is not None:
            self.logger.warning(
                "Serving sample products",
                count=len(self._fallback_products),
                error=result.error,
            )
            return FetchResult.degraded(list(self._fallback_products), result)
        return result

    async def fetch_by_slug(self, slug: str) -> FetchResult[Product]:
        """The active product with this slug."""
        return await self._fetch_one(
            "fetch_by_slug",
            "slug",
            slug,
            lambda: (
                self._products()
                .eq("slug", slug)
                .eq("is_active", True)
            ),
        )

    async def fetch_by_id(self, product_id: str) -> FetchResult[Product]:
        """The active product with this id."""
        return await self._fetch_one(
            "fetch_by_id",
            "id",
            product_id,
            lambda: (
                self._products()
                .eq("id", product_id)
                .eq("is_active", True)
            ),
        )

    async def fetch_by_category(self, category_slug: str) -> FetchResult[List[Product]]:
        """Active products whose category has this slug, newest first."""
        return await self._fetch_list(
            "fetch_by_category",
            lambda: (
                self._products(self._config.CATEGORY_FILTERED_SELECT)
                .eq("category.slug", category_slug)
                .eq("is_active", True)
                .order("created_at", desc=True)
            ),
            category_slug=category_slug,
        )

    async def fetch_promoted(self) -> FetchResult[List[Product]]:
        """Active hot-sale products, newest first."""
        return await self._fetch_list(
            "fetch_promoted",
            lambda: (
                self._products()
                .eq("is_hot_sale", True)
                .eq("is_active", True)
                .order("created_at", desc=True)
            ),
        )

    async def fetch_related(
        self,
        category_id: str,
        exclude_id: str,
        limit: Optional[int] = None,
    ) -> FetchResult[List[Product]]:
        """Other active products from the same category, newest first."""
        limit = self._resolve_limit(limit, self._config.RELATED_LIMIT)
        if limit == 0:
            return FetchResult.success([])
        return await self._fetch_list(
            "fetch_related",
            lambda: (
                self._products()
                .eq("category_id", category_id)
                .neq("id", exclude_id)
                .eq("is_active", True)
                .order("created_at", desc=True)
                .limit(limit)
            ),
            category_id=category_id,
            exclude_id=exclude_id,
            limit=limit,
        )

    async def fetch_recommended(self, limit: Optional[int] = None) -> FetchResult[List[Product]]:
        """Active products that are on sale or highly rated, best rated first."""
        limit = self._resolve_limit(limit, self._config.RECOMMENDED_LIMIT)
        if limit == 0:
            return FetchResult.success([])
        min_rating = f"{self._config.RECOMMENDED_MIN_RATING:g}"
        return await self._fetch_list(
            "fetch_recommended",
            lambda: (
                self._products()
                .eq("is_active", True)
                .or_(f"is_hot_sale.eq.true,rating.gte.{min_rating}")
                .order("rating", desc=True)
                .limit(limit)
            ),
            limit=limit,
        )
