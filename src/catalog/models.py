"""
Pydantic models for catalog rows.

A Product is read together with its joined category, images and variants
in one Supabase select, so the nested collections arrive inline:

    {
        "id": "...", "name": "...", "price": 499, ...,
        "category": {"name": "Men's T-Shirts", "slug": "mens-t-shirts"},
        "images": [{"id": "...", "image_url": "...", "is_primary": true, ...}],
        "variants": [{"id": "...", "size": "M", "stock_quantity": 3, ...}]
    }

Models are frozen; filtering and view-model derivation build new
collections instead of mutating fetched products.
"""

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _coerce_identifier(v: Any) -> Any:
    # Supabase returns uuid keys as strings but serial keys as ints
    if v is None or isinstance(v, str):
        return v
    return str(v)


Identifier = Annotated[str, BeforeValidator(_coerce_identifier)]


# ============================================================================
# Joined Entities
# ============================================================================

class CategoryRef(BaseModel):
    """Category fields embedded in a product row."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    slug: str


class ProductImage(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Identifier
    image_url: str
    alt_text: Optional[str] = None
    is_primary: bool = False
    sort_order: int = 0


class ProductVariant(BaseModel):
    """A purchasable size/colour/stock combination of a product."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Identifier
    size: Optional[str] = None
    color_name: Optional[str] = None
    color_code: Optional[str] = None
    stock_quantity: int = Field(default=0, ge=0)
    price_adjustment: float = 0.0
    is_active: bool = True

    @property
    def is_purchasable(self) -> bool:
        return self.is_active and self.stock_quantity > 0


# ============================================================================
# Product
# ============================================================================

class Product(BaseModel):
    """A catalog product with its joined category, images and variants."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Identifier
    name: str
    description: Optional[str] = None
    category_id: Optional[Identifier] = None
    subcategory: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    sku: Optional[str] = None
    slug: str
    is_active: bool = True
    is_hot_sale: bool = False
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    category: Optional[CategoryRef] = None
    images: List[ProductImage] = Field(default_factory=list)
    variants: List[ProductVariant] = Field(default_factory=list)

    @field_validator("rating", "review_count", mode="before")
    @classmethod
    def default_null_score(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("variants", mode="before")
    @classmethod
    def default_null_variants(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("images", mode="before")
    @classmethod
    def order_images(cls, v: Any) -> Any:
        """
        Order images by sort_order.

        PostgREST does not order embedded rows, so the stable sort keeps
        fetch order for equal sort_order values.
        """
        if v is None:
            return []
        return sorted(v, key=_image_sort_key)

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None

    @property
    def category_slug(self) -> Optional[str]:
        return self.category.slug if self.category else None


def _image_sort_key(image: Any) -> int:
    if isinstance(image, ProductImage):
        return image.sort_order
    if isinstance(image, dict):
        return image.get("sort_order") or 0
    return getattr(image, "sort_order", 0) or 0


def parse_products(rows: Optional[List[dict]]) -> List[Product]:
    """Parse Supabase product rows into Product models."""
    return [Product.model_validate(row) for row in rows or []]
