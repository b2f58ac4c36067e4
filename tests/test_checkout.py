import pytest

from storefront_cart.core.errors import CartError, CheckoutValidationError
from storefront_cart.models import LineItem, TotalsConfig
from storefront_cart.services.checkout import prepare_checkout, validate_checkout_items
from storefront_cart.services.tax import parse_gst_rate, resolve_tax_preset, sanitize_tax_metadata


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Brass Keychain", ("8305", 18)),
        ("Ceramic Coffee Mug", ("6912", 12)),
        ("Executive Diary", ("4820", 18)),
        ("White Logo Cap", ("6501", 18)),
        ("Gel Pen", ("9608", 18)),
        ("Round-neck T-Shirt", ("6109", 5)),
        ("Gift Card", None),
        ("", None),
    ],
)
def test_tax_presets(name, expected):
    assert resolve_tax_preset(name) == expected


@pytest.mark.parametrize("value, expected", [(18, 18), ("12%", 12), ("0", None), (-5, None), (None, None)])
def test_parse_gst_rate(value, expected):
    assert parse_gst_rate(value) == expected


def test_sanitize_prefers_explicit_metadata():
    item = {"name": "Coffee Mug", "hsn": " 1234 ", "taxRate": "28%"}
    clean = sanitize_tax_metadata(item)

    assert clean["hsnCode"] == "1234"
    assert clean["gstRate"] == 28
    assert "hsnCode" not in item


def test_sanitize_fills_gaps_from_presets():
    item = LineItem(id="mug", name="Coffee Mug", price=200, quantity=1, hsnCode="  ")
    clean = sanitize_tax_metadata(item)

    assert clean["hsnCode"] == "6912"
    assert clean["gstRate"] == 12


def test_validate_rejects_empty_list():
    with pytest.raises(CheckoutValidationError) as exc:
        validate_checkout_items([])
    assert "empty" in exc.value.message


def test_validate_requires_size_for_variant_products():
    item = LineItem(id="tee", name="Tee", price=10, quantity=1, showSizes=True)
    with pytest.raises(CheckoutValidationError) as exc:
        validate_checkout_items([item])
    assert exc.value.product_id == "tee"


def test_validate_enforces_order_limit():
    item = LineItem(id="pen", name="Pen", price=10, quantity=3, maxPurchaseQuantity=1)
    with pytest.raises(CartError) as exc:
        validate_checkout_items([item])
    assert str(exc.value) == "You can only buy up to 1 unit of Pen per order."


def test_validate_rejects_malformed_items():
    with pytest.raises(CheckoutValidationError):
        validate_checkout_items([{"name": "no id", "quantity": 1}])


def test_prepare_checkout_for_buy_now_item():
    buy_now = {"id": "mug", "name": "Coffee Mug", "price": 200, "quantity": 2}
    totals = prepare_checkout([buy_now], TotalsConfig(shipping_fee=29, tax_amount=None))

    assert totals.subtotal == 400
    assert totals.tax_amount == 48
    assert totals.total == 477
    assert totals.items[0].hsn_code == "6912"
