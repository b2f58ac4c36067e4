"""
Storefront Cart

Cart reconciliation and order-total derivation for the storefront.
"""

__version__ = "1.0.0"
