"""GST metadata normalisation for checkout items"""

import re
from collections.abc import Mapping
from typing import Any, Optional

from ..models.product import lenient_number

# (pattern, HSN code, GST rate %), first match wins
TAX_PRESETS: list[tuple[re.Pattern, str, float]] = [
    (re.compile(r"keychain", re.I), "8305", 18),
    (re.compile(r"ceramic\s+coffee\s+mug|coffee\s+mug|mug", re.I), "6912", 12),
    (re.compile(r"executive\s+diary|pen\s+set", re.I), "4820", 18),
    (re.compile(r"white\s+logo\s+cap|cap", re.I), "6501", 18),
    (re.compile(r"diary", re.I), "4820", 18),
    (re.compile(r"\bpen\b", re.I), "9608", 18),
    (re.compile(r"t\s*-?shirt|polo", re.I), "6109", 5),
]


def resolve_tax_preset(name: Any) -> Optional[tuple[str, float]]:
    """HSN code and GST rate guessed from a product name"""
    normalized = str(name or "").strip()
    if not normalized:
        return None
    for pattern, hsn_code, gst_rate in TAX_PRESETS:
        if pattern.search(normalized):
            return hsn_code, gst_rate
    return None


def parse_gst_rate(value: Any) -> Optional[float]:
    """Positive GST rate from a number or a string such as '18%'"""
    if isinstance(value, str):
        value = re.sub(r"[^0-9.]+", "", value)
    rate = lenient_number(value)
    if rate is None or rate <= 0 or rate == float("inf"):
        return None
    return rate


def sanitize_tax_metadata(item: Any) -> dict[str, Any]:
    """
    Checkout-ready copy of an item with clean hsnCode/gstRate.

    Accepts LineItem models or plain mappings; the input is not modified.
    """
    if isinstance(item, Mapping):
        data = dict(item)
    else:
        data = item.model_dump(by_alias=True)

    hsn_source = data.get("hsnCode")
    if hsn_source is None:
        hsn_source = data.get("hsn")
    hsn_code = str(hsn_source).strip() if hsn_source is not None else ""

    gst_source = data.get("gstRate")
    if gst_source is None:
        gst_source = data.get("taxRate")
    gst_rate = parse_gst_rate(gst_source)

    if not hsn_code or gst_rate is None:
        preset = resolve_tax_preset(data.get("name") or data.get("title"))
        if preset:
            hsn_code = hsn_code or preset[0]
            gst_rate = gst_rate if gst_rate is not None else preset[1]

    data["hsnCode"] = hsn_code or None
    data["gstRate"] = gst_rate
    return data
