import pytest
from fastapi.testclient import TestClient

from storefront_cart.database import InMemoryStorage
from storefront_cart.main import app

USER_HEADERS = {"X-User-Id": "u-1"}

TEE = {
    "id": "prod-tee",
    "name": "Logo Polo",
    "price": 50,
    "showSizes": True,
    "sizes": [{"label": "M", "stock": 2, "isAvailable": True}],
    "maxPurchaseQuantity": 1,
}
MUG = {"id": "mug", "name": "Coffee Mug", "price": 100, "stock": 5}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr("storefront_cart.database.cart_storage", InMemoryStorage())
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_empty_guest_cart(client):
    body = client.get("/api/cart").json()
    assert body["cart"]["storage_key"] == "identity:cart:guest"
    assert body["cart"]["items"] == []


def test_add_reports_clamp(client):
    response = client.post(
        "/api/cart/items",
        json={"product": TEE, "size": "m", "quantity": 5},
        headers=USER_HEADERS,
    )
    body = response.json()

    assert response.status_code == 200
    assert body["result"]["outcome"] == "clamped"
    assert body["result"]["limit"] == 1
    assert body["cart"]["count"] == 1
    assert body["cart"]["items"][0]["size"] == "M"
    assert body["message"].startswith("Only 1 of Logo Polo")


def test_add_unavailable_variant_is_rejected(client):
    body = client.post(
        "/api/cart/items",
        json={"product": TEE, "size": "XL"},
    ).json()

    assert body["result"]["outcome"] == "rejected"
    assert body["result"]["reason"] == "unavailable"
    assert body["cart"]["items"] == []


def test_cart_persists_per_identity(client):
    client.post("/api/cart/items", json={"product": MUG, "quantity": 2}, headers=USER_HEADERS)

    assert client.get("/api/cart", headers=USER_HEADERS).json()["cart"]["count"] == 2
    assert client.get("/api/cart").json()["cart"]["count"] == 0


def test_update_and_remove(client):
    client.post("/api/cart/items", json={"product": MUG}, headers=USER_HEADERS)

    updated = client.put(
        "/api/cart/items/mug", json={"quantity": 9}, headers=USER_HEADERS
    ).json()
    assert updated["result"]["outcome"] == "clamped"
    assert updated["cart"]["items"][0]["quantity"] == 5

    removed = client.delete("/api/cart/items/mug", headers=USER_HEADERS).json()
    assert removed["result"]["outcome"] == "removed"

    again = client.delete("/api/cart/items/mug", headers=USER_HEADERS).json()
    assert again["result"]["outcome"] == "noop"


def test_bulk_remove_and_clear(client):
    client.post("/api/cart/items", json={"product": MUG}, headers=USER_HEADERS)
    client.post("/api/cart/items", json={"product": TEE, "size": "M"}, headers=USER_HEADERS)

    pruned = client.post(
        "/api/cart/items/remove",
        json={"items": [{"product": "mug"}]},
        headers=USER_HEADERS,
    ).json()
    assert pruned["result"]["removed"] == 1
    assert [item["id"] for item in pruned["cart"]["items"]] == ["prod-tee"]

    cleared = client.delete("/api/cart", headers=USER_HEADERS).json()
    assert cleared["result"]["outcome"] == "cleared"
    assert client.get("/api/cart", headers=USER_HEADERS).json()["cart"]["items"] == []


def test_totals_for_current_cart(client):
    client.post("/api/cart/items", json={"product": MUG, "quantity": 2}, headers=USER_HEADERS)

    body = client.post(
        "/api/checkout/totals",
        json={"shippingFee": 49, "discount": 30},
        headers=USER_HEADERS,
    ).json()

    assert body["success"] is True
    assert body["totals"]["subtotal"] == 200
    assert body["totals"]["shippingFee"] == 49
    assert body["totals"]["total"] == 219


def test_totals_for_buy_now_item(client):
    body = client.post(
        "/api/checkout/totals",
        json={"items": [dict(MUG, quantity=1)], "shippingFee": 0},
    ).json()
    assert body["totals"]["total"] == 100


def test_totals_rejects_order_limit_violation(client):
    response = client.post(
        "/api/checkout/totals",
        json={"items": [dict(TEE, size="M", quantity=2)]},
    )
    assert response.status_code == 400
    assert "up to 1 unit" in response.json()["detail"]


def test_totals_rejects_empty_cart(client):
    response = client.post("/api/checkout/totals", json={})
    assert response.status_code == 400


def test_update_with_size_on_product_without_variants(client):
    client.post("/api/cart/items", json={"product": MUG}, headers=USER_HEADERS)

    body = client.put(
        "/api/cart/items/mug", json={"quantity": 3, "size": "M"}, headers=USER_HEADERS
    ).json()

    assert body["result"]["outcome"] == "updated"
    assert body["cart"]["items"][0]["quantity"] == 3

    removed = client.delete("/api/cart/items/mug?size=M", headers=USER_HEADERS).json()
    assert removed["result"]["outcome"] == "removed"
