"""Cart models"""

from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, Optional

from .product import ProductSnapshot, normalize_variant


@dataclass(frozen=True)
class LineItemKey:
    """Identity of a cart line: product id plus normalized size"""
    product_id: str
    size: str = ""

    @classmethod
    def of(cls, product_id: Any, size: Any = None) -> "LineItemKey":
        return cls(product_id=str(product_id), size=normalize_variant(size))


class LineItem(ProductSnapshot):
    """Item in a shopping cart"""
    quantity: int = Field(gt=0)
    size: Optional[str] = None

    @property
    def key(self) -> LineItemKey:
        return LineItemKey.of(self.id, self.size)


class CartOutcome(str, Enum):
    """What a cart mutation did"""
    ADDED = "added"
    MERGED = "merged"
    UPDATED = "updated"
    CLAMPED = "clamped"
    REJECTED = "rejected"
    REMOVED = "removed"
    CLEARED = "cleared"
    NOOP = "noop"


class CartReason(str, Enum):
    """Why a mutation was rejected or skipped"""
    UNAVAILABLE = "unavailable"
    LIMIT_REACHED = "limit_reached"
    NOT_IN_CART = "not_in_cart"
    INVALID_QUANTITY = "invalid_quantity"


class CartResult(BaseModel):
    """Tagged result returned from every cart mutation"""
    outcome: CartOutcome
    reason: Optional[CartReason] = None
    # Effective maximum applied, None when unbounded
    limit: Optional[int] = None
    requested: Optional[int] = None
    quantity: int = 0
    item: Optional[LineItem] = None
    removed: int = 0

    @property
    def changed(self) -> bool:
        return self.outcome not in (CartOutcome.REJECTED, CartOutcome.NOOP)

    @property
    def clamped(self) -> bool:
        return self.outcome == CartOutcome.CLAMPED


class Cart(BaseModel):
    """Snapshot of a cart for API responses"""
    storage_key: str
    items: list[LineItem] = []
    count: int = 0
    total: float = 0.0


class AddToCartRequest(BaseModel):
    """Request to add a product snapshot to the cart"""
    product: ProductSnapshot
    size: Optional[str] = None
    quantity: Any = 1


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: Any
    size: Optional[str] = None


class RemoveCartItemsRequest(BaseModel):
    """Bulk removal of purchased items"""
    items: list[Any] = []


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    result: Optional[CartResult] = None
    message: Optional[str] = None
