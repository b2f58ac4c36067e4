"""Checkout API routes"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..core.errors import CheckoutValidationError
from ..models.checkout import (
    CheckoutTotalsRequest,
    CheckoutTotalsResponse,
    TotalsConfig,
)
from ..database import CartPersistence
from ..services.checkout import prepare_checkout
from .cart import get_cart_persistence

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("/totals", response_model=CheckoutTotalsResponse)
def checkout_totals(
    request: CheckoutTotalsRequest,
    persistence: CartPersistence = Depends(get_cart_persistence),
):
    """
    Price breakdown for checkout.

    With explicit items this is a "buy now" checkout of just those items;
    without, the whole cart of the current identity is priced.
    """
    items = request.items if request.items is not None else persistence.store.items
    config = TotalsConfig(
        shipping_fee=(
            request.shipping_fee
            if request.shipping_fee is not None
            else settings.default_shipping_fee
        ),
        tax_amount=request.tax_amount,
        discount=request.discount,
    )

    try:
        totals = prepare_checkout(items, config)
    except CheckoutValidationError as e:
        logger.info(f"Checkout rejected for {persistence.storage_key}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    return CheckoutTotalsResponse(
        success=True,
        totals=totals,
        requires_payment=totals.requires_payment,
    )
