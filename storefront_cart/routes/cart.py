"""Cart API routes"""

from fastapi import APIRouter, Depends, Header, Query
from typing import Optional

from ..models.cart import (
    Cart,
    CartOutcome,
    CartReason,
    CartResult,
    LineItemKey,
    AddToCartRequest,
    UpdateCartItemRequest,
    RemoveCartItemsRequest,
    CartResponse,
)
from ..models.identity import Identity
from ..database import CartPersistence, open_cart

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
) -> Identity:
    """Identity from headers set by the auth gateway; none means guest"""
    if x_user_id or x_user_email:
        return Identity(is_authenticated=True, user_id=x_user_id, email=x_user_email)
    return Identity.guest()


def get_cart_persistence(identity: Identity = Depends(get_identity)) -> CartPersistence:
    return open_cart(identity)


def cart_snapshot(persistence: CartPersistence) -> Cart:
    store = persistence.store
    return Cart(
        storage_key=store.storage_key,
        items=store.items,
        count=store.count,
        total=store.total,
    )


def line_key(persistence: CartPersistence, product_id: str, size: Optional[str]) -> LineItemKey:
    """Key of the cart line; a size on a product stored without one is ignored"""
    key = LineItemKey.of(product_id, size)
    if key.size and persistence.store.get_item(key) is None:
        unsized = LineItemKey.of(product_id)
        if persistence.store.get_item(unsized) is not None:
            return unsized
    return key


def describe(result: CartResult, name: str = "Item") -> str:
    """Human-readable message for a cart result"""
    if result.outcome == CartOutcome.REJECTED:
        return f"{name} is currently unavailable"
    if result.outcome == CartOutcome.NOOP:
        if result.reason == CartReason.LIMIT_REACHED:
            return f"You already have the maximum quantity of {name} in your cart"
        if result.reason == CartReason.INVALID_QUANTITY:
            return "Quantity must be a number"
        return "Item not in cart"
    if result.outcome == CartOutcome.CLAMPED:
        return f"Only {result.limit} of {name} available; quantity set to {result.quantity}"
    if result.outcome in (CartOutcome.ADDED, CartOutcome.MERGED):
        return f"{name} added to cart!"
    if result.outcome == CartOutcome.REMOVED:
        return "Item removed from cart."
    if result.outcome == CartOutcome.CLEARED:
        return "Cart cleared"
    return "Cart updated"


@router.get("", response_model=CartResponse)
def get_cart(persistence: CartPersistence = Depends(get_cart_persistence)):
    """Get the active identity's cart"""
    return CartResponse(cart=cart_snapshot(persistence))


@router.post("/items", response_model=CartResponse)
def add_to_cart(
    request: AddToCartRequest,
    persistence: CartPersistence = Depends(get_cart_persistence),
):
    """Add a product snapshot to the cart"""
    result = persistence.store.add_item(request.product, request.size, request.quantity)
    return CartResponse(
        cart=cart_snapshot(persistence),
        result=result,
        message=describe(result, request.product.name),
    )


@router.put("/items/{product_id}", response_model=CartResponse)
def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    persistence: CartPersistence = Depends(get_cart_persistence),
):
    """Update item quantity in cart; zero or less removes it"""
    key = line_key(persistence, product_id, request.size)
    result = persistence.store.update_quantity(key, request.quantity)
    return CartResponse(
        cart=cart_snapshot(persistence),
        result=result,
        message=describe(result),
    )


@router.delete("/items/{product_id}", response_model=CartResponse)
def remove_from_cart(
    product_id: str,
    size: Optional[str] = Query(None, description="Variant label"),
    persistence: CartPersistence = Depends(get_cart_persistence),
):
    """Remove an item from the cart"""
    result = persistence.store.remove_item(line_key(persistence, product_id, size))
    return CartResponse(
        cart=cart_snapshot(persistence),
        result=result,
        message=describe(result),
    )


@router.post("/items/remove", response_model=CartResponse)
def remove_purchased_items(
    request: RemoveCartItemsRequest,
    persistence: CartPersistence = Depends(get_cart_persistence),
):
    """Prune items after an order was placed"""
    result = persistence.store.remove_items(request.items)
    message = f"Removed {result.removed} item(s)" if result.removed else "No matching items"
    return CartResponse(cart=cart_snapshot(persistence), result=result, message=message)


@router.delete("", response_model=CartResponse)
def clear_cart(persistence: CartPersistence = Depends(get_cart_persistence)):
    """Clear all items from cart"""
    result = persistence.store.clear_cart()
    return CartResponse(
        cart=cart_snapshot(persistence),
        result=result,
        message=describe(result),
    )
