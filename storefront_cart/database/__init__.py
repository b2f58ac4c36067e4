# Database modules

from ..core.config import settings
from .carts import LineItemStore
from .storage import KeyValueStorage, InMemoryStorage, FileStorage, build_storage
from .persistence import CartPersistence

# Singleton storage medium shared by request-scoped carts
cart_storage = build_storage(settings)


def open_cart(identity) -> CartPersistence:
    """Persistence-backed cart for an identity, loaded from its partition"""
    persistence = CartPersistence(cart_storage)
    persistence.switch_identity(identity)
    return persistence


__all__ = [
    "LineItemStore",
    "KeyValueStorage",
    "InMemoryStorage",
    "FileStorage",
    "build_storage",
    "CartPersistence",
    "cart_storage",
    "open_cart",
]
