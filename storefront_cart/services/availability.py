"""
Availability and order-limit resolution.

Quantities are plain ints; None stands for "unbounded" throughout.
"""

import math
from typing import Any, Optional

from ..models.product import ProductSnapshot, VariantStock, lenient_number, normalize_variant


def _floor_count(value: Any) -> Optional[int]:
    """max(0, floor(value)), or None when value is absent or not finite"""
    number = lenient_number(value)
    if number is None or math.isinf(number):
        return None
    return max(0, math.floor(number))


def find_variant(product: ProductSnapshot, size: Any) -> Optional[VariantStock]:
    """Variant whose normalized label matches the normalized token"""
    wanted = normalize_variant(size)
    if not wanted:
        return None
    return next(
        (entry for entry in product.sizes if normalize_variant(entry.label) == wanted),
        None,
    )


def resolve_availability(product: ProductSnapshot, size: Any = None) -> Optional[int]:
    """
    Maximum purchasable quantity for a product/variant.

    Args:
        product: Catalog snapshot carrying stock
        size: Requested variant token, if any

    Returns:
        Non-negative int, or None when unbounded
    """
    if not product.show_sizes:
        return _floor_count(product.stock)

    if not normalize_variant(size):
        # Variant not chosen yet; checkout refuses to proceed without one
        return None

    variant = find_variant(product, size)
    if variant is None or not variant.is_available:
        return 0

    return _floor_count(variant.stock)


def resolve_order_limit(product: ProductSnapshot) -> Optional[int]:
    """Per-order purchase cap, independent of stock"""
    raw = lenient_number(product.max_purchase_quantity)
    if raw is None or math.isinf(raw) or raw <= 0:
        return None
    return math.floor(raw)


def effective_max(availability: Optional[int], limit: Optional[int]) -> Optional[int]:
    """Tighter of availability and order limit"""
    bounds = [value for value in (availability, limit) if value is not None]
    return min(bounds) if bounds else None


def resolve_effective_max(product: ProductSnapshot, size: Any = None) -> Optional[int]:
    return effective_max(resolve_availability(product, size), resolve_order_limit(product))
