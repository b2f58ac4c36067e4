"""Product snapshot models supplied by the catalog"""

import math
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Any, Optional, Union


def lenient_number(value: Any) -> Optional[float]:
    """Coerce a catalog number, mapping junk to None"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def normalize_variant(token: Any) -> str:
    """Canonical form of a size/option label used for every comparison"""
    if token is None:
        return ""
    return str(token).strip().upper()


class VariantStock(BaseModel):
    """Stock for a single size/option of a product"""
    label: str
    stock: float = Field(ge=0, default=0)
    is_available: bool = Field(default=True, alias="isAvailable")

    class Config:
        populate_by_name = True

    @field_validator("label", mode="before")
    @classmethod
    def _strip_label(cls, value: Any) -> str:
        return str(value).strip()

    @field_validator("stock", mode="before")
    @classmethod
    def _clamp_stock(cls, value: Any) -> float:
        number = lenient_number(value)
        return max(number, 0) if number is not None else 0


class ProductSnapshot(BaseModel):
    """Read-only catalog data attached to a cart line"""
    id: str
    name: str = "Untitled Product"
    price: float = Field(ge=0, default=0.0)
    original_price: Optional[float] = Field(default=None, alias="originalPrice")
    # None means the catalog did not report stock (unbounded)
    stock: Optional[float] = None
    show_sizes: bool = Field(default=False, alias="showSizes")
    sizes: list[VariantStock] = []
    max_purchase_quantity: Optional[float] = Field(default=None, alias="maxPurchaseQuantity")
    hsn_code: Optional[str] = Field(default=None, alias="hsnCode")
    gst_rate: Optional[Union[float, str]] = Field(default=None, alias="gstRate")

    class Config:
        populate_by_name = True
        extra = "allow"

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("stock", "max_purchase_quantity", mode="before")
    @classmethod
    def _lenient_limits(cls, value: Any) -> Optional[float]:
        return lenient_number(value)

    @model_validator(mode="after")
    def _default_original_price(self) -> "ProductSnapshot":
        if self.original_price is None:
            self.original_price = self.price
        return self
