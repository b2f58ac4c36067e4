"""Checkout models"""

from pydantic import BaseModel, Field
from typing import Any, Optional


class TotalsConfig(BaseModel):
    """Fees and discounts applied on top of the item subtotal"""
    shipping_fee: float = Field(default=0.0, ge=0, alias="shippingFee")
    # None derives tax from each item's GST rate
    tax_amount: Optional[float] = Field(default=0.0, ge=0, alias="taxAmount")
    discount: float = Field(default=0.0, ge=0)
    currency: Optional[str] = None

    class Config:
        populate_by_name = True


class TotalsBreakdown(BaseModel):
    """Monetary breakdown handed to checkout"""
    items: list[Any] = []
    subtotal: float = 0.0
    shipping_fee: float = Field(default=0.0, alias="shippingFee")
    tax_amount: float = Field(default=0.0, alias="taxAmount")
    discount: float = 0.0
    total: float = 0.0
    currency: str = "INR"

    class Config:
        populate_by_name = True

    @property
    def requires_payment(self) -> bool:
        return self.total > 0


class CheckoutTotalsRequest(BaseModel):
    """Totals for explicit items (buy now) or the current cart"""
    items: Optional[list[dict[str, Any]]] = None
    shipping_fee: Optional[float] = Field(default=None, ge=0, alias="shippingFee")
    tax_amount: Optional[float] = Field(default=0.0, ge=0, alias="taxAmount")
    discount: float = Field(default=0.0, ge=0)

    class Config:
        populate_by_name = True


class CheckoutTotalsResponse(BaseModel):
    """Response from the totals endpoint"""
    success: bool
    totals: Optional[TotalsBreakdown] = None
    requires_payment: bool = True
    error_message: Optional[str] = None
