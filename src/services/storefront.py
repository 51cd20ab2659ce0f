"""
Storefront page assembly.

Turns route parameters into page payloads: the category listing with its
filter chips, the best-selling row, recommendations and the product page.

Flow for a listing:
    category key -> storage slug -> repository read
        -> subcategory chip filter -> product cards
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog.categories import (
    ALL_CATEGORY,
    ALL_FILTER,
    display_name,
    is_all_category,
    map_category_to_slug,
    subcategory_filters,
)
from catalog.exceptions import CatalogUnavailableError, ProductNotFoundError
from catalog.filters import filter_by_subcategory_token, is_all_token
from catalog.models import Product
from catalog.navigation import NavigationTracker
from catalog.repository import ProductRepository
from catalog.results import FetchResult, FetchStatus
from catalog.view_models import ProductCard, ProductDetail, to_cards
from config.constants import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_QUERY_CONFIG,
    PLACEHOLDER_IMAGE_URL,
)
from config.settings import Settings
from core.logging import LoggerMixin


# =============================================================================
# Page Payloads
# =============================================================================

class ProductCollection(BaseModel):
    """A list of product cards plus how the read went."""
    status: FetchStatus = FetchStatus.OK
    degraded: bool = False
    error: Optional[str] = None
    count: int = 0
    products: List[ProductCard] = Field(default_factory=list)


class ProductListing(ProductCollection):
    """The category listing page."""
    category: str = ALL_CATEGORY
    category_slug: Optional[str] = None
    title: str
    filters: List[str] = Field(default_factory=lambda: [ALL_FILTER])
    selected_filter: str = ALL_FILTER
    total: int = 0
    selected_product: Optional[ProductCard] = None


# =============================================================================
# Service
# =============================================================================

class StorefrontService(LoggerMixin):
    """
    Builds storefront pages from the product repository.

    Listings and rows never fail: a failed read becomes an empty (or
    sample) collection with its status attached. Single-product pages
    raise ProductNotFoundError or CatalogUnavailableError instead.
    """

    def __init__(
        self,
        repository: ProductRepository,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        placeholder_image_url: str = PLACEHOLDER_IMAGE_URL,
        related_limit: int = DEFAULT_QUERY_CONFIG.RELATED_LIMIT,
        recommended_limit: int = DEFAULT_QUERY_CONFIG.RECOMMENDED_LIMIT,
    ):
        self.repository = repository
        self.currency_symbol = currency_symbol
        self.placeholder_image_url = placeholder_image_url
        self.related_limit = related_limit
        self.recommended_limit = recommended_limit

    @classmethod
    def from_settings(cls, repository: ProductRepository, settings: Settings) -> "StorefrontService":
        return cls(
            repository,
            currency_symbol=settings.currency_symbol,
            placeholder_image_url=settings.placeholder_image_url,
            related_limit=settings.related_products_limit,
            recommended_limit=settings.recommended_products_limit,
        )

    def _cards(self, products: List[Product]) -> List[ProductCard]:
        return to_cards(products, self.currency_symbol, self.placeholder_image_url)

    def _collection(self, result: FetchResult) -> ProductCollection:
        cards = self._cards(result.items)
        return ProductCollection(
            status=result.status,
            degraded=result.is_degraded,
            error=result.error,
            count=len(cards),
            products=cards,
        )

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def list_products(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        selected_product_id: Optional[str] = None,
    ) -> ProductListing:
        """
        Build the listing page for a URL category and subcategory chip.

        Args:
            category: URL category key ("men", "shapewear") or a storage slug;
                      empty or "all" lists every active product
            subcategory: Filter chip text from the query string
            selected_product_id: Product to preselect (``?product=`` deep link)
        """
        if is_all_category(category):
            category_key = ALL_CATEGORY
            category_slug = None
            result = await self.repository.fetch_all_active()
        else:
            category_key = category
            category_slug = map_category_to_slug(category)
            result = await self.repository.fetch_by_category(category_slug)

        fetched = result.items
        visible = filter_by_subcategory_token(fetched, subcategory)

        self.logger.info(
            "Built product listing",
            category=category_key,
            category_slug=category_slug,
            subcategory=subcategory,
            fetched=len(fetched),
            visible=len(visible),
            status=result.status.value,
        )

        cards = self._cards(visible)
        selected = None
        if selected_product_id:
            selected = next((c for c in cards if c.id == selected_product_id), None)

        return ProductListing(
            status=result.status,
            degraded=result.is_degraded,
            error=result.error,
            category=category_key,
            category_slug=category_slug,
            title=display_name(None if category_key == ALL_CATEGORY else category_key),
            filters=subcategory_filters(category_key),
            selected_filter=ALL_FILTER if is_all_token(subcategory) else subcategory,
            total=len(fetched),
            count=len(cards),
            products=cards,
            selected_product=selected,
        )

    async def best_selling(self) -> ProductCollection:
        """The hot-sale row on the home page."""
        return self._collection(await self.repository.fetch_promoted())

    async def recommended(self, limit: Optional[int] = None) -> ProductCollection:
        return self._collection(
            await self.repository.fetch_recommended(
                self.recommended_limit if limit is None else limit
            )
        )

    # -------------------------------------------------------------------------
    # Product page
    # -------------------------------------------------------------------------

    async def get_product(self, product_id: str) -> Product:
        """Resolve an active product by id, raising on not-found or backend failure."""
        return self._require(await self.repository.fetch_by_id(product_id), product_id)

    async def product_detail(self, slug: str) -> ProductDetail:
        product = self._require(await self.repository.fetch_by_slug(slug), slug)
        return await self._detail(product)

    async def product_detail_by_id(self, product_id: str) -> ProductDetail:
        return await self._detail(await self.get_product(product_id))

    def _require(self, result: FetchResult[Product], key: str) -> Product:
        if result.status is FetchStatus.NOT_FOUND:
            raise ProductNotFoundError(key)
        if not result.ok:
            raise CatalogUnavailableError(
                result.error or "Catalog unavailable", error_type=result.error_type
            )
        return result.data

    async def _detail(self, product: Product) -> ProductDetail:
        related: List[Product] = []
        if product.category_id:
            related_result = await self.repository.fetch_related(
                product.category_id, product.id, self.related_limit
            )
            related = related_result.items

        return ProductDetail.from_product(
            product,
            currency_symbol=self.currency_symbol,
            placeholder=self.placeholder_image_url,
            related=related,
        )


# =============================================================================
# Browsing Session
# =============================================================================

class BrowsingSession(LoggerMixin):
    """
    One shopper's listing navigation.

    Only the most recent navigation may publish its listing; a listing
    that finishes after the shopper has moved on is discarded.
    """

    def __init__(self, service: StorefrontService, tracker: Optional[NavigationTracker] = None):
        self.service = service
        self.tracker = tracker or NavigationTracker()
        self.current: Optional[ProductListing] = None

    async def navigate(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> Optional[ProductListing]:
        """
        Load a listing for this navigation.

        Returns:
            The listing, or None when a newer navigation started first.
        """
        token = self.tracker.begin(category, subcategory)
        listing = await self.tracker.guard(
            token, self.service.list_products(category, subcategory)
        )
        if listing is None:
            self.logger.debug(
                "Dropped stale listing",
                category=category,
                subcategory=subcategory,
                generation=token.generation,
            )
            return None

        self.current = listing
        return listing
