"""
Add-to-cart flow.

Cart rows live in the Supabase ``cart_items`` table. Unlike catalog
reads, cart writes surface their failures: the shopper has to know the
item did not make it into the cart.
"""

import asyncio
from typing import Any, Optional

from pydantic import BaseModel

from catalog.exceptions import CatalogError
from catalog.models import Product, ProductVariant
from catalog.view_models import first_purchasable_variant
from config.constants import CART_ITEMS_TABLE
from core.logging import LoggerMixin, error_fields
from services.storefront import StorefrontService


MAX_QUANTITY = 10


class CartError(CatalogError):
    """The cart could not be updated."""
    pass


class InvalidVariantError(CartError):
    """The requested variant does not belong to the product or cannot be bought."""
    pass


class CartAddition(BaseModel):
    """What was added, for the confirmation message."""
    product_id: str
    variant_id: Optional[str] = None
    quantity: int
    message: str


def describe_addition(product: Product, variant: Optional[ProductVariant], quantity: int) -> str:
    """
    Confirmation text, e.g. "2x Classic Tee (M - Black) added to cart".
    """
    label = product.name
    if variant:
        label += f" ({variant.size or 'Standard'} - {variant.color_name or 'Default'})"
    if quantity > 1:
        label = f"{quantity}x {label}"
    return f"{label} added to cart"


class CartService(LoggerMixin):
    """Adds catalog products to a shopper's cart."""

    def __init__(self, client: Any, storefront: StorefrontService):
        self._client = client
        self.storefront = storefront

    def _resolve_variant(self, product: Product, variant_id: Optional[str]) -> Optional[ProductVariant]:
        if variant_id is None:
            # Products without purchasable variants are added without one
            return first_purchasable_variant(product)

        variant = next((v for v in product.variants if v.id == variant_id), None)
        if variant is None:
            raise InvalidVariantError(f"Variant {variant_id} does not belong to product {product.id}")
        if not variant.is_purchasable:
            raise InvalidVariantError(f"Variant {variant_id} is out of stock")
        return variant

    async def add_item(
        self,
        user_id: str,
        product_id: str,
        variant_id: Optional[str] = None,
        quantity: int = 1,
    ) -> CartAddition:
        """
        Add a product to the shopper's cart.

        Raises:
            ProductNotFoundError: No active product with this id
            CatalogUnavailableError: The product could not be read
            InvalidVariantError: The variant is unknown or out of stock
            CartError: The cart row could not be written
        """
        quantity = max(1, min(MAX_QUANTITY, quantity))
        product = await self.storefront.get_product(product_id)
        variant = self._resolve_variant(product, variant_id)

        payload = {
            "user_id": user_id,
            "product_id": product.id,
            "variant_id": variant.id if variant else None,
            "quantity": quantity,
        }

        try:
            query = self._client.table(CART_ITEMS_TABLE).insert(payload)
            await asyncio.to_thread(query.execute)
        except Exception as e:
            self.logger.error(
                "Failed to add to cart",
                user_id=user_id,
                product_id=product.id,
                **error_fields(e),
            )
            raise CartError("Error adding to cart. Please try again.") from e

        self.logger.info(
            "Added to cart",
            user_id=user_id,
            product_id=product.id,
            variant_id=payload["variant_id"],
            quantity=quantity,
        )
        return CartAddition(
            product_id=product.id,
            variant_id=payload["variant_id"],
            quantity=quantity,
            message=describe_addition(product, variant, quantity),
        )
