"""
Cart routes.

All endpoints require a Supabase JWT.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from api.dependencies import get_cart_service
from catalog.exceptions import CatalogUnavailableError, ProductNotFoundError
from core.auth import SupabaseUser, require_auth
from services.cart import MAX_QUANTITY, CartAddition, CartError, CartService, InvalidVariantError


router = APIRouter(prefix="/api/cart", tags=["Cart"])


class AddToCartRequest(BaseModel):
    """Request to add a product to the cart."""
    product_id: str = Field(..., description="Product to add")
    variant_id: Optional[str] = Field(
        default=None,
        description="Variant to add; defaults to the first variant in stock"
    )
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY)


@router.post("/items", response_model=CartAddition, summary="Add a product to the cart")
async def add_to_cart(
    request: AddToCartRequest,
    user: SupabaseUser = Depends(require_auth),
    cart: CartService = Depends(get_cart_service),
) -> CartAddition:
    try:
        return await cart.add_item(
            user_id=user.id,
            product_id=request.product_id,
            variant_id=request.variant_id,
            quantity=request.quantity,
        )
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidVariantError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog is temporarily unavailable",
        )
    except CartError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
