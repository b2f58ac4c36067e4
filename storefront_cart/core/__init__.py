# Core modules

from .config import settings, get_settings, Settings
from .errors import CartError, CheckoutValidationError, StorageError

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "CartError",
    "CheckoutValidationError",
    "StorageError",
]
