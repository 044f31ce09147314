"""
Payment Ledger Abstraction Layer
================================

Mirrors local products and SKUs as payment provider products and prices.
"""

from .factory import PaymentFactory
from .interface import LedgerPrice, LedgerProduct, PaymentException, PaymentProviderInterface
from .stripe_provider import StripeProvider

__all__ = [
    "PaymentProviderInterface",
    "LedgerProduct",
    "LedgerPrice",
    "PaymentException",
    "StripeProvider",
    "PaymentFactory",
]
