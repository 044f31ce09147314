"""
Payment Provider Factory
=========================

Factory pattern for creating payment ledger instances based on configuration.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import PaymentProviderInterface
from .stripe_provider import StripeProvider

logger = logging.getLogger(__name__)

PaymentBackend = Literal["stripe"]


class PaymentFactory:
    """
    Factory for creating payment ledger instances.

    Usage:
        # In settings.py
        PAYMENT_PROVIDER = 'stripe'

        # In your code
        payment_provider = PaymentFactory.create()
    """

    @staticmethod
    def create(backend: PaymentBackend | None = None) -> PaymentProviderInterface:
        """
        Create a payment ledger instance.

        Args:
            backend: Payment backend type ('stripe')
                    If None, reads from settings.PAYMENT_PROVIDER

        Returns:
            PaymentProviderInterface implementation

        Raises:
            ValueError: If backend type is invalid
        """
        backend_type = backend or getattr(settings, "PAYMENT_PROVIDER", "stripe")

        logger.info(f"Creating payment provider: {backend_type}")

        if backend_type == "stripe":
            return StripeProvider()
        raise ValueError(f"Invalid payment provider: {backend_type}. Currently only 'stripe' is supported")
