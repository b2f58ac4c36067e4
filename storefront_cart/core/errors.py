"""Cart error types

Ordinary stock exhaustion is never an error; it is reported through
CartResult. These cover the few conditions callers must not ignore.
"""

from typing import Optional


class CartError(Exception):
    """Base class for storefront cart errors"""


class CheckoutValidationError(CartError):
    """Items cannot proceed to payment as they are"""

    def __init__(self, message: str, product_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.product_id = product_id


class StorageError(CartError):
    """The storage medium failed to read or write a partition"""
