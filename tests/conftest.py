import pytest

from storefront_cart.core.config import Settings
from storefront_cart.database import CartPersistence, InMemoryStorage, LineItemStore
from storefront_cart.models import ProductSnapshot


def make_product(**overrides) -> ProductSnapshot:
    data = {
        "id": "prod-001",
        "name": "Classic T-Shirt",
        "price": 100.0,
        "stock": 5,
    }
    data.update(overrides)
    return ProductSnapshot.model_validate(data)


def make_sized_product(sizes, **overrides) -> ProductSnapshot:
    data = {
        "id": "prod-tee",
        "name": "Logo Polo",
        "price": 50.0,
        "showSizes": True,
        "sizes": sizes,
    }
    data.update(overrides)
    return ProductSnapshot.model_validate(data)


@pytest.fixture
def product():
    return make_product()


@pytest.fixture
def sized_product():
    return make_sized_product(
        [
            {"label": "S", "stock": 0, "isAvailable": True},
            {"label": "M", "stock": 2, "isAvailable": True},
            {"label": "L", "stock": 10, "isAvailable": False},
            {"label": "XL", "stock": 7},
        ]
    )


@pytest.fixture
def store():
    return LineItemStore("identity:cart:guest")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        cart_key_prefix="identity:cart",
        guest_cart_key="identity:cart:guest",
        currency="INR",
    )


@pytest.fixture
def persistence(storage, test_settings):
    return CartPersistence(storage, settings=test_settings)
