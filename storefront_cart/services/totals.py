"""Order totals for checkout"""

import copy
import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from ..core.config import settings
from ..models.checkout import TotalsBreakdown, TotalsConfig
from ..models.product import lenient_number
from .tax import parse_gst_rate


def _field(item: Any, *names: str) -> Any:
    for name in names:
        value = item.get(name) if isinstance(item, Mapping) else getattr(item, name, None)
        if value is not None:
            return value
    return None


def _amount(item: Any, name: str) -> float:
    number = lenient_number(_field(item, name))
    return number if number is not None else 0.0


def _snapshot(item: Any) -> Any:
    if isinstance(item, BaseModel):
        return item.model_copy(deep=True)
    return copy.deepcopy(item)


def line_total(item: Any) -> float:
    return _amount(item, "price") * _amount(item, "quantity")


def derive_tax(items: Iterable[Any]) -> float:
    """GST owed on the items, from each item's own rate"""
    amounts = []
    for item in items:
        rate = parse_gst_rate(_field(item, "gst_rate", "gstRate"))
        if rate is None:
            continue
        amounts.append(line_total(item) * rate / 100)
    return round(math.fsum(amounts), 2)


def calculate_totals(
    items: Iterable[Any],
    config: Optional[TotalsConfig] = None,
) -> TotalsBreakdown:
    """
    Monetary breakdown for the given items.

    Only the supplied items count, so the same function serves full-cart
    checkout and single-item "buy now". Amounts are summed as given; rounding
    is left to presentation.

    Args:
        items: LineItem models or mappings with price and quantity
        config: Shipping fee, tax amount and discount

    Returns:
        TotalsBreakdown with total clamped at zero
    """
    config = config or TotalsConfig()
    selected = [_snapshot(item) for item in items or []]

    # fsum is exactly rounded, so item order cannot change the subtotal
    subtotal = math.fsum(line_total(item) for item in selected)
    tax_amount = config.tax_amount if config.tax_amount is not None else derive_tax(selected)
    total = max(0.0, subtotal + config.shipping_fee + tax_amount - config.discount)

    return TotalsBreakdown(
        items=selected,
        subtotal=subtotal,
        shipping_fee=config.shipping_fee,
        tax_amount=tax_amount,
        discount=config.discount,
        total=total,
        currency=config.currency or settings.currency,
    )
