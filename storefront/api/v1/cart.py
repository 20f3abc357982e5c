"""Cart API endpoints."""

import uuid

from fastapi import APIRouter

from storefront.api.deps import Cart, CurrentUser
from storefront.schemas.cart import (
    AddToCartRequest,
    CartOperation,
    CartSummary,
    CartValidation,
)
from storefront.worker import send_purchase_receipt_email

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartSummary)
async def view_cart(user: CurrentUser, cart: Cart):
    return await cart.view(user.id)


@router.get("/count")
async def cart_count(user: CurrentUser, cart: Cart) -> dict:
    return {"count": await cart.item_count(user.id)}


@router.post("/items", response_model=CartOperation, status_code=201)
async def add_to_cart(request: AddToCartRequest, user: CurrentUser, cart: Cart):
    return await cart.add(user.id, request.game_id)


@router.delete("/items/{game_id}", response_model=CartOperation)
async def remove_from_cart(game_id: uuid.UUID, user: CurrentUser, cart: Cart):
    return await cart.remove(user.id, game_id)


@router.delete("", response_model=CartOperation)
async def clear_cart(user: CurrentUser, cart: Cart):
    return await cart.clear(user.id)


@router.post("/checkout", response_model=CartOperation)
async def checkout(user: CurrentUser, cart: Cart):
    """
    Purchase everything in the cart as one atomic batch.

    On failure the cart is left untouched and the purchase error is
    returned unchanged.
    """
    result = await cart.checkout(user.id)

    # Checkout committed; safe to queue the receipt
    send_purchase_receipt_email.delay(
        email=user.email,
        game_titles=result.game_titles,
        total=str(result.total_amount),
    )
    return result


@router.get("/validate")
async def validate_cart(user: CurrentUser, cart: Cart) -> dict:
    return {"valid": await cart.validate_for_checkout(user.id)}


@router.get("/validation", response_model=CartValidation)
async def cart_validation_details(user: CurrentUser, cart: Cart):
    return await cart.validation_details(user.id)
