"""
Dependency Injection Container
================================

Simple service locator pattern for managing infrastructure dependencies.
Provides centralized access to infrastructure services through their
abstract interfaces, and to the catalog domain services built on them.

Usage:
    from infrastructure.container import container

    # In your view
    payment = container.payment()
    product_service = container.product_service()
"""

import logging
from typing import Optional

from .email import EmailFactory, EmailServiceInterface
from .media import MediaHostFactory, MediaHostInterface
from .payments import PaymentFactory, PaymentProviderInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton: every import shares the same instance.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._media_host: Optional[MediaHostInterface] = None
            self._email: Optional[EmailServiceInterface] = None
            self._payment: Optional[PaymentProviderInterface] = None

            # Domain Services
            self._product_service = None
            self._sku_service = None
            self._review_service = None

            self._initialized = True
            logger.info("Service container initialized")

    def media_host(self, backend: Optional[str] = None) -> MediaHostInterface:
        """
        Get media host instance (S3 or local filesystem).

        Args:
            backend: Media backend type ('s3' or 'local')
                    If None, uses configuration from settings

        Returns:
            MediaHostInterface implementation (cached)
        """
        if self._media_host is None or backend is not None:
            self._media_host = MediaHostFactory.create(backend)
            logger.debug(f"Created media host: {type(self._media_host).__name__}")

        return self._media_host

    def email(self, backend: Optional[str] = None) -> EmailServiceInterface:
        """
        Get email service instance.

        Args:
            backend: Email backend type ('mailgun' or 'mock')
                    If None, uses configuration from settings

        Returns:
            EmailServiceInterface implementation (cached)
        """
        if self._email is None or backend is not None:
            self._email = EmailFactory.create(backend)
            logger.debug(f"Created email service: {type(self._email).__name__}")

        return self._email

    def payment(self, backend: Optional[str] = None) -> PaymentProviderInterface:
        """
        Get payment ledger instance.

        Args:
            backend: Payment backend type ('stripe')
                    If None, uses configuration from settings

        Returns:
            PaymentProviderInterface implementation (cached)
        """
        if self._payment is None or backend is not None:
            self._payment = PaymentFactory.create(backend)
            logger.debug(f"Created payment service: {type(self._payment).__name__}")

        return self._payment

    def product_service(self):
        """Get ProductService instance."""
        if self._product_service is None:
            from marketplace.catalog.domain.services import ProductService

            self._product_service = ProductService(payment=self.payment(), media_host=self.media_host())
            logger.debug("Created ProductService")
        return self._product_service

    def sku_service(self):
        """Get SkuService instance."""
        if self._sku_service is None:
            from marketplace.catalog.domain.services import SkuService

            self._sku_service = SkuService(payment=self.payment())
            logger.debug("Created SkuService")
        return self._sku_service

    def review_service(self):
        """Get ReviewService instance."""
        if self._review_service is None:
            from marketplace.catalog.domain.services import ReviewService

            self._review_service = ReviewService()
            logger.debug("Created ReviewService")
        return self._review_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._media_host = None
        self._email = None
        self._payment = None
        self._product_service = None
        self._sku_service = None
        self._review_service = None
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()

