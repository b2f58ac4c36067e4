# Cart services

from .availability import (
    resolve_availability,
    resolve_order_limit,
    resolve_effective_max,
    effective_max,
)
from .totals import calculate_totals
from .tax import sanitize_tax_metadata
from .checkout import validate_checkout_items, prepare_checkout

__all__ = [
    "resolve_availability",
    "resolve_order_limit",
    "resolve_effective_max",
    "effective_max",
    "calculate_totals",
    "sanitize_tax_metadata",
    "validate_checkout_items",
    "prepare_checkout",
]
