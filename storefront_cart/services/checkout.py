"""Checkout pre-flight: validate items, then derive totals"""

import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from ..core.errors import CheckoutValidationError
from ..models.cart import LineItem
from ..models.checkout import TotalsBreakdown, TotalsConfig
from ..models.product import normalize_variant
from .availability import resolve_order_limit
from .tax import sanitize_tax_metadata
from .totals import calculate_totals

logger = logging.getLogger(__name__)


def _as_line_item(item: Any) -> LineItem:
    if isinstance(item, LineItem):
        return item
    try:
        return LineItem.model_validate(item)
    except ValidationError as e:
        raise CheckoutValidationError(f"Invalid checkout item: {e.error_count()} errors") from e


def validate_checkout_items(items: Iterable[Any]) -> list[LineItem]:
    """
    Refuse items that cannot go to payment as they are.

    Stock is not rechecked here; the order API does that when the order
    is placed.

    Raises:
        CheckoutValidationError: empty list, missing size or order limit exceeded
    """
    line_items = [_as_line_item(item) for item in items or []]
    if not line_items:
        raise CheckoutValidationError("Your cart is empty")

    for item in line_items:
        if item.show_sizes and not normalize_variant(item.size):
            raise CheckoutValidationError(
                f"Please choose a size for {item.name}",
                product_id=item.id,
            )

        limit = resolve_order_limit(item)
        if limit is not None and item.quantity > limit:
            unit = "unit" if limit == 1 else "units"
            raise CheckoutValidationError(
                f"You can only buy up to {limit} {unit} of {item.name} per order.",
                product_id=item.id,
            )

    return line_items


def prepare_checkout(
    items: Iterable[Any],
    config: Optional[TotalsConfig] = None,
) -> TotalsBreakdown:
    """Validated, tax-annotated totals for the selected items"""
    line_items = validate_checkout_items(items)
    annotated = [
        LineItem.model_validate(sanitize_tax_metadata(item)) for item in line_items
    ]
    totals = calculate_totals(annotated, config)
    logger.info(
        f"Checkout prepared: {len(annotated)} lines, total {totals.total} {totals.currency}"
    )
    return totals
