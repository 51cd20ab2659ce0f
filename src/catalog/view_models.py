"""
Display-ready view models derived from catalog products.

Price labels, colour/size facets and thumbnail selection are computed
here and nowhere else; the API layer only serialises the results.
All helpers are pure functions of a Product.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from catalog.models import Product, ProductImage, ProductVariant
from config.constants import (
    DEFAULT_CARD_RATING,
    DEFAULT_CATEGORY_NAME,
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_SWATCH_COLOR,
    PLACEHOLDER_IMAGE_URL,
)


# ============================================================================
# Facets
# ============================================================================

class ColorFacet(BaseModel):
    """A distinct colour offered by a product's variants."""
    name: str
    code: Optional[str] = None

    @property
    def swatch(self) -> str:
        return self.code or DEFAULT_SWATCH_COLOR


def primary_image(product: Product) -> Optional[ProductImage]:
    """The image flagged primary, else the first image, else None."""
    for image in product.images:
        if image.is_primary:
            return image
    return product.images[0] if product.images else None


def primary_image_url(product: Product, placeholder: str = PLACEHOLDER_IMAGE_URL) -> str:
    image = primary_image(product)
    return image.image_url if image else placeholder


def color_facets(product: Product) -> List[ColorFacet]:
    """Distinct colour names across variants, in first-seen order."""
    seen = set()
    facets = []
    for variant in product.variants:
        if not variant.color_name or variant.color_name in seen:
            continue
        seen.add(variant.color_name)
        facets.append(ColorFacet(name=variant.color_name, code=variant.color_code))
    return facets


def size_facets(product: Product) -> List[str]:
    """Distinct size labels across variants, in first-seen order."""
    return list(dict.fromkeys(v.size for v in product.variants if v.size))


def first_purchasable_variant(product: Product) -> Optional[ProductVariant]:
    return next((v for v in product.variants if v.is_purchasable), None)


def display_price(
    amount: Union[Product, float, None],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """
    Format a price as a whole-unit label with thousands separators.

    >>> display_price(1299.5)
    'Rs. 1,300.00'
    """
    if isinstance(amount, Product):
        amount = amount.price
    rounded = Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{currency_symbol} {int(rounded):,}.00"


def discount_percent(product: Product) -> Optional[int]:
    """Whole-percent markdown from original_price, if the product is discounted."""
    if not product.original_price or product.original_price <= product.price:
        return None
    saved = (product.original_price - product.price) / product.original_price * 100
    return int(Decimal(str(saved)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ============================================================================
# Cards
# ============================================================================

class ProductCard(BaseModel):
    """A product tile in listings and the best-selling row."""
    id: str
    name: str
    slug: str
    price: str
    image: str
    rating: float
    colors: List[ColorFacet] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    category: str = DEFAULT_CATEGORY_NAME
    is_hot_sale: bool = False

    @classmethod
    def from_product(
        cls,
        product: Product,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        placeholder: str = PLACEHOLDER_IMAGE_URL,
    ) -> "ProductCard":
        return cls(
            id=product.id,
            name=product.name,
            slug=product.slug,
            price=display_price(product, currency_symbol),
            image=primary_image_url(product, placeholder),
            rating=product.rating or DEFAULT_CARD_RATING,
            colors=color_facets(product),
            sizes=size_facets(product),
            category=product.category_name or DEFAULT_CATEGORY_NAME,
            is_hot_sale=product.is_hot_sale,
        )


def to_cards(
    products: Sequence[Product],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    placeholder: str = PLACEHOLDER_IMAGE_URL,
) -> List[ProductCard]:
    return [ProductCard.from_product(p, currency_symbol, placeholder) for p in products]


# ============================================================================
# Detail
# ============================================================================

class ProductDetail(ProductCard):
    """Everything the product page shows, including related products."""
    description: Optional[str] = None
    sku: Optional[str] = None
    category_id: Optional[str] = None
    original_price: Optional[str] = None
    discount_percent: Optional[int] = None
    review_count: int = 0
    gallery: List[str] = Field(default_factory=list)
    selected_size: Optional[str] = None
    selected_color: Optional[str] = None
    default_variant_id: Optional[str] = None
    in_stock: bool = False
    related: List[ProductCard] = Field(default_factory=list)

    @classmethod
    def from_product(
        cls,
        product: Product,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        placeholder: str = PLACEHOLDER_IMAGE_URL,
        related: Sequence[Product] = (),
    ) -> "ProductDetail":
        card = ProductCard.from_product(product, currency_symbol, placeholder)
        # The size/colour pickers start on the first variant, purchasable or not
        first_variant = product.variants[0] if product.variants else None
        purchasable = first_purchasable_variant(product)
        discount = discount_percent(product)

        return cls(
            **card.model_dump(),
            description=product.description,
            sku=product.sku,
            category_id=product.category_id,
            original_price=display_price(product.original_price, currency_symbol) if discount else None,
            discount_percent=discount,
            review_count=product.review_count,
            gallery=[image.image_url for image in product.images] or [placeholder],
            selected_size=first_variant.size if first_variant else None,
            selected_color=first_variant.color_name if first_variant else None,
            default_variant_id=purchasable.id if purchasable else None,
            in_stock=purchasable is not None or not product.variants,
            related=to_cards(related, currency_symbol, placeholder),
        )
