"""Line-item store for the active cart"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from ..models.cart import CartOutcome, CartReason, CartResult, LineItem, LineItemKey
from ..models.product import ProductSnapshot, lenient_number, normalize_variant
from ..services.availability import find_variant, resolve_effective_max

logger = logging.getLogger(__name__)

CartListener = Callable[["LineItemStore", CartResult], None]

# Tried in order when an entry passed to remove_items has no usable id
ID_FIELDS = ("id", "productId", "product_id", "product", "_id", "slug")


def _requested_quantity(value: Any) -> int:
    """max(1, floor(value)); junk counts as 1"""
    number = lenient_number(value)
    if number is None or math.isinf(number):
        return 1
    return max(1, math.floor(number))


def _ceiling(limit: Optional[int]) -> Optional[int]:
    return None if limit is None else max(1, limit)


def _coerce_key(entry: Any) -> Optional[LineItemKey]:
    """Best-effort key for an entry handed to remove_items"""
    if isinstance(entry, LineItemKey):
        return entry
    if isinstance(entry, LineItem):
        return entry.key
    if isinstance(entry, str):
        return LineItemKey.of(entry) if entry.strip() else None
    if isinstance(entry, (tuple, list)) and entry:
        product_id = entry[0]
        size = entry[1] if len(entry) > 1 else None
        return LineItemKey.of(product_id, size) if product_id else None
    if isinstance(entry, Mapping):
        for field_name in ID_FIELDS:
            candidate = entry.get(field_name)
            if isinstance(candidate, Mapping):
                candidate = next(
                    (candidate.get(name) for name in ID_FIELDS if candidate.get(name)),
                    None,
                )
            if candidate not in (None, ""):
                return LineItemKey.of(candidate, entry.get("size"))
    return None


class LineItemStore:
    """
    Ordered line items for one identity partition.

    The store consults availability and order limits before committing a
    change and reports what happened through a CartResult. Stock exhaustion
    is an expected condition and never raises.
    """

    def __init__(self, storage_key: str, items: Optional[Iterable[LineItem]] = None):
        self.storage_key = storage_key
        self._items: list[LineItem] = []
        self._listeners: list[CartListener] = []
        if items:
            self.replace(items, storage_key)

    # ==================== Accessors ====================

    @property
    def items(self) -> list[LineItem]:
        """Copies of the current items, in insertion order"""
        return [item.model_copy(deep=True) for item in self._items]

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> float:
        """Informational subtotal; checkout uses calculate_totals"""
        return sum(item.price * item.quantity for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, key: LineItemKey) -> Optional[LineItem]:
        return next((item for item in self._items if item.key == key), None)

    # ==================== Listeners ====================

    def subscribe(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def _commit(self, result: CartResult) -> CartResult:
        for listener in list(self._listeners):
            listener(self, result)
        return result

    # ==================== Mutations ====================

    def add_item(
        self,
        product: ProductSnapshot,
        size: Optional[str] = None,
        quantity: Any = 1,
    ) -> CartResult:
        """Add a product, merging into an existing line with the same key"""
        requested = _requested_quantity(quantity)
        limit = resolve_effective_max(product, size)

        if limit is not None and limit <= 0:
            logger.debug(f"Rejected {product.id} size={size!r}: unavailable")
            return CartResult(
                outcome=CartOutcome.REJECTED,
                reason=CartReason.UNAVAILABLE,
                limit=limit,
                requested=requested,
            )

        stored_size = self._stored_size(product, size)
        key = LineItemKey.of(product.id, stored_size)
        ceiling = _ceiling(limit)
        existing_index = next(
            (i for i, item in enumerate(self._items) if item.key == key),
            None,
        )

        if existing_index is not None:
            existing = self._items[existing_index]
            wanted = existing.quantity + requested
            new_quantity = wanted if ceiling is None else min(wanted, ceiling)

            if new_quantity == existing.quantity:
                return CartResult(
                    outcome=CartOutcome.NOOP,
                    reason=CartReason.LIMIT_REACHED,
                    limit=limit,
                    requested=requested,
                    quantity=existing.quantity,
                    item=existing.model_copy(deep=True),
                )

            merged = existing.model_copy(
                update={
                    "quantity": new_quantity,
                    "hsn_code": product.hsn_code if product.hsn_code is not None else existing.hsn_code,
                    "gst_rate": product.gst_rate if product.gst_rate is not None else existing.gst_rate,
                }
            )
            self._items[existing_index] = merged
            outcome = CartOutcome.CLAMPED if new_quantity < wanted else CartOutcome.MERGED
            return self._commit(
                CartResult(
                    outcome=outcome,
                    limit=limit,
                    requested=requested,
                    quantity=new_quantity,
                    item=merged.model_copy(deep=True),
                )
            )

        initial = requested if ceiling is None else min(requested, ceiling)
        data = product.model_dump()
        data.update(quantity=initial, size=stored_size)
        item = LineItem(**data)
        self._items.append(item)
        outcome = CartOutcome.CLAMPED if initial < requested else CartOutcome.ADDED
        return self._commit(
            CartResult(
                outcome=outcome,
                limit=limit,
                requested=requested,
                quantity=initial,
                item=item.model_copy(deep=True),
            )
        )

    def update_quantity(self, key: LineItemKey, quantity: Any) -> CartResult:
        """Set an item's quantity, clamped to its stored snapshot's limits"""
        number = lenient_number(quantity)
        if number is None or math.isinf(number):
            return CartResult(outcome=CartOutcome.NOOP, reason=CartReason.INVALID_QUANTITY)

        requested = math.floor(number)
        index = next(
            (i for i, item in enumerate(self._items) if item.key == key),
            None,
        )
        if index is None:
            return CartResult(
                outcome=CartOutcome.NOOP,
                reason=CartReason.NOT_IN_CART,
                requested=requested,
            )

        if requested <= 0:
            return self.remove_item(key)

        existing = self._items[index]
        limit = resolve_effective_max(existing, existing.size)
        ceiling = _ceiling(limit)
        new_quantity = requested if ceiling is None else min(requested, ceiling)

        updated = existing.model_copy(update={"quantity": new_quantity})
        self._items[index] = updated
        outcome = CartOutcome.CLAMPED if new_quantity != requested else CartOutcome.UPDATED
        return self._commit(
            CartResult(
                outcome=outcome,
                limit=limit,
                requested=requested,
                quantity=new_quantity,
                item=updated.model_copy(deep=True),
            )
        )

    def remove_item(self, key: LineItemKey) -> CartResult:
        """Remove an item; removing a missing item is a no-op"""
        item = self.get_item(key)
        if item is None:
            return CartResult(outcome=CartOutcome.NOOP, reason=CartReason.NOT_IN_CART)

        self._items = [i for i in self._items if i.key != key]
        return self._commit(
            CartResult(outcome=CartOutcome.REMOVED, item=item, removed=1)
        )

    def remove_items(self, entries: Iterable[Any]) -> CartResult:
        """Remove purchased items, tolerating partial identifiers"""
        keys = set()
        for entry in entries or []:
            key = _coerce_key(entry)
            if key is None:
                logger.debug(f"Skipping unidentifiable cart entry: {entry!r}")
                continue
            keys.add(key)

        remaining = [item for item in self._items if item.key not in keys]
        removed = len(self._items) - len(remaining)
        if not removed:
            return CartResult(outcome=CartOutcome.NOOP, reason=CartReason.NOT_IN_CART)

        self._items = remaining
        return self._commit(CartResult(outcome=CartOutcome.REMOVED, removed=removed))

    def clear_cart(self) -> CartResult:
        """Clear all items from the cart"""
        removed = len(self._items)
        self._items = []
        return self._commit(CartResult(outcome=CartOutcome.CLEARED, removed=removed))

    def replace(self, items: Iterable[LineItem], storage_key: Optional[str] = None) -> None:
        """
        Swap in a whole item list, e.g. when the identity changes.

        Duplicate keys are folded into the first occurrence and non-positive
        quantities dropped. Listeners are not notified.
        """
        if storage_key is not None:
            self.storage_key = storage_key

        loaded: list[LineItem] = []
        for item in items:
            if item.quantity <= 0:
                continue
            index = next((i for i, kept in enumerate(loaded) if kept.key == item.key), None)
            if index is None:
                loaded.append(item.model_copy(deep=True))
            else:
                kept = loaded[index]
                loaded[index] = kept.model_copy(update={"quantity": kept.quantity + item.quantity})
        self._items = loaded

    # ==================== Helpers ====================

    @staticmethod
    def _stored_size(product: ProductSnapshot, size: Optional[str]) -> Optional[str]:
        """Label kept on the line: the catalog's own label for variants"""
        if not product.show_sizes or not normalize_variant(size):
            return None
        variant = find_variant(product, size)
        return variant.label if variant else str(size).strip()
