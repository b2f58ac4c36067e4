# Storefront Cart Models

from .product import ProductSnapshot, VariantStock, normalize_variant
from .cart import (
    Cart,
    CartOutcome,
    CartReason,
    CartResult,
    LineItem,
    LineItemKey,
    AddToCartRequest,
    UpdateCartItemRequest,
    RemoveCartItemsRequest,
    CartResponse,
)
from .checkout import (
    TotalsConfig,
    TotalsBreakdown,
    CheckoutTotalsRequest,
    CheckoutTotalsResponse,
)
from .identity import Identity

__all__ = [
    "ProductSnapshot",
    "VariantStock",
    "normalize_variant",
    "Cart",
    "CartOutcome",
    "CartReason",
    "CartResult",
    "LineItem",
    "LineItemKey",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "RemoveCartItemsRequest",
    "CartResponse",
    "TotalsConfig",
    "TotalsBreakdown",
    "CheckoutTotalsRequest",
    "CheckoutTotalsResponse",
    "Identity",
]
