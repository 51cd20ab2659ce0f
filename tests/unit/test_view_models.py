"""
Tests for view-model derivation: images, facets, variants, prices, cards.
"""

from typing import List, Optional

import pytest

from catalog.models import Product
from catalog.view_models import (
    ProductCard,
    ProductDetail,
    color_facets,
    discount_percent,
    display_price,
    first_purchasable_variant,
    primary_image_url,
    size_facets,
)
from config.constants import PLACEHOLDER_IMAGE_URL


# =============================================================================
# Helpers
# =============================================================================

def image(image_id: str, primary: bool = False, sort_order: int = 0) -> dict:
    return {
        "id": image_id,
        "image_url": f"https://cdn.test/{image_id}.jpg",
        "is_primary": primary,
        "sort_order": sort_order,
    }


def variant(
    variant_id: str,
    size: Optional[str] = None,
    color: Optional[str] = None,
    code: Optional[str] = None,
    stock: int = 1,
    active: bool = True,
) -> dict:
    return {
        "id": variant_id,
        "size": size,
        "color_name": color,
        "color_code": code,
        "stock_quantity": stock,
        "price_adjustment": 0,
        "is_active": active,
    }


def make_product(
    images: Optional[List[dict]] = None,
    variants: Optional[List[dict]] = None,
    **fields,
) -> Product:
    row = {
        "id": "p1",
        "name": "Classic Tee",
        "price": 499,
        "slug": "classic-tee",
        "images": images or [],
        "variants": variants or [],
    }
    row.update(fields)
    return Product.model_validate(row)


# =============================================================================
# Images
# =============================================================================

class TestPrimaryImageUrl:

    def test_primary_wins_regardless_of_position(self):
        product = make_product(images=[image("a"), image("b"), image("c", primary=True)])
        assert primary_image_url(product) == "https://cdn.test/c.jpg"

    def test_first_image_when_none_primary(self):
        product = make_product(images=[image("a"), image("b")])
        assert primary_image_url(product) == "https://cdn.test/a.jpg"

    def test_placeholder_without_images(self):
        assert primary_image_url(make_product()) == PLACEHOLDER_IMAGE_URL

    def test_custom_placeholder(self):
        assert primary_image_url(make_product(), placeholder="/none.png") == "/none.png"

    def test_images_ordered_by_sort_order_then_fetch_order(self):
        product = make_product(images=[
            image("late", sort_order=2),
            image("first-tie", sort_order=1),
            image("second-tie", sort_order=1),
        ])
        assert [i.id for i in product.images] == ["first-tie", "second-tie", "late"]
        assert primary_image_url(product) == "https://cdn.test/first-tie.jpg"


# =============================================================================
# Facets
# =============================================================================

class TestFacets:

    @pytest.fixture
    def product(self):
        return make_product(variants=[
            variant("v1", size="M", color="Black", code="#000"),
            variant("v2", size="L", color="Black", code="#111"),
            variant("v3", size="M", color="White", code="#fff"),
            variant("v4", size="", color=""),
            variant("v5", size=None, color=None),
            variant("v6", size="XL", color="Navy"),
        ])

    def test_color_facets_dedup_first_seen(self, product):
        facets = color_facets(product)
        assert [(f.name, f.code) for f in facets] == [
            ("Black", "#000"), ("White", "#fff"), ("Navy", None)
        ]

    def test_color_facet_swatch_default(self, product):
        assert color_facets(product)[-1].swatch == "#000000"

    def test_size_facets_dedup_first_seen(self, product):
        assert size_facets(product) == ["M", "L", "XL"]

    def test_no_empty_entries(self, product):
        assert "" not in size_facets(product)
        assert all(f.name for f in color_facets(product))

    def test_no_variants(self):
        product = make_product()
        assert color_facets(product) == []
        assert size_facets(product) == []


# =============================================================================
# Variants
# =============================================================================

class TestFirstPurchasableVariant:

    def test_skips_inactive_and_out_of_stock(self):
        product = make_product(variants=[
            variant("v1", stock=0),
            variant("v2", stock=5, active=False),
            variant("v3", stock=2),
            variant("v4", stock=9),
        ])
        assert first_purchasable_variant(product).id == "v3"

    def test_none_when_nothing_purchasable(self):
        product = make_product(variants=[
            variant("v1", stock=0),
            variant("v2", stock=3, active=False),
        ])
        assert first_purchasable_variant(product) is None

    def test_none_without_variants(self):
        assert first_purchasable_variant(make_product()) is None


# =============================================================================
# Prices
# =============================================================================

class TestDisplayPrice:

    @pytest.mark.parametrize("amount,label", [
        (499, "Rs. 499.00"),
        (1299, "Rs. 1,299.00"),
        (1299.5, "Rs. 1,300.00"),
        (2.5, "Rs. 3.00"),
        (1234567.4, "Rs. 1,234,567.00"),
        (0, "Rs. 0.00"),
        (None, "Rs. 0.00"),
    ])
    def test_rounds_and_groups(self, amount, label):
        assert display_price(amount) == label

    def test_accepts_product(self):
        assert display_price(make_product(price=2499)) == "Rs. 2,499.00"

    def test_currency_symbol(self):
        assert display_price(100, currency_symbol="₹") == "₹ 100.00"

    def test_discount_percent(self):
        assert discount_percent(make_product(price=600, original_price=800)) == 25
        assert discount_percent(make_product(price=600, original_price=None)) is None
        assert discount_percent(make_product(price=600, original_price=500)) is None


# =============================================================================
# Cards and detail
# =============================================================================

class TestProductCard:

    def test_card_fields(self):
        product = make_product(
            images=[image("a"), image("b", primary=True)],
            variants=[variant("v1", size="M", color="Black", code="#000")],
            rating=4.5,
            is_hot_sale=True,
            category={"name": "Men's T-Shirts", "slug": "mens-t-shirts"},
        )
        card = ProductCard.from_product(product)

        assert card.id == "p1"
        assert card.price == "Rs. 499.00"
        assert card.image == "https://cdn.test/b.jpg"
        assert card.rating == 4.5
        assert card.sizes == ["M"]
        assert card.colors[0].name == "Black"
        assert card.category == "Men's T-Shirts"
        assert card.is_hot_sale is True

    def test_unrated_and_uncategorised_defaults(self):
        card = ProductCard.from_product(make_product(rating=0))
        assert card.rating == 4.0
        assert card.category == "General"
        assert card.image == PLACEHOLDER_IMAGE_URL


class TestProductDetail:

    def test_detail_fields(self):
        product = make_product(
            images=[image("a", sort_order=1), image("b", sort_order=0)],
            variants=[
                variant("v1", size="S", color="Red", stock=0),
                variant("v2", size="M", color="Blue", stock=3),
            ],
            price=750,
            original_price=1000,
            review_count=12,
            description="Soft tee",
        )
        related = [make_product(id="p2", slug="other-tee", name="Other Tee")]

        detail = ProductDetail.from_product(product, related=related)

        assert detail.gallery == ["https://cdn.test/b.jpg", "https://cdn.test/a.jpg"]
        assert detail.selected_size == "S"
        assert detail.selected_color == "Red"
        assert detail.default_variant_id == "v2"
        assert detail.in_stock is True
        assert detail.original_price == "Rs. 1,000.00"
        assert detail.discount_percent == 25
        assert detail.review_count == 12
        assert [c.id for c in detail.related] == ["p2"]

    def test_out_of_stock_detail(self):
        product = make_product(variants=[variant("v1", stock=0)])
        detail = ProductDetail.from_product(product)

        assert detail.in_stock is False
        assert detail.default_variant_id is None
        assert detail.gallery == [PLACEHOLDER_IMAGE_URL]
        assert detail.original_price is None
