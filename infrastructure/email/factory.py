"""
Email Service Factory
======================

Factory pattern for creating email service instances based on configuration.
"""

import logging
from typing import Literal

from django.conf import settings

from .interface import EmailServiceInterface
from .mailgun_service import MailgunEmailService
from .mock_service import MockEmailService


logger = logging.getLogger(__name__)

EmailBackend = Literal["mailgun", "mock"]


class EmailFactory:
    """
    Factory for creating email service instances.

    Usage:
        # In settings.py
        EMAIL_SERVICE_BACKEND = 'mailgun'  # or 'mock' for testing

        # In your code
        email_service = EmailFactory.create()
    """

    @staticmethod
    def create(backend: EmailBackend | None = None) -> EmailServiceInterface:
        """
        Create an email service instance.

        Args:
            backend: Email backend type ('mailgun' or 'mock')
                    If None, reads from settings.EMAIL_SERVICE_BACKEND

        Returns:
            EmailServiceInterface implementation

        Raises:
            ValueError: If backend type is invalid
        """
        is_testing = getattr(settings, "TESTING", False)
        default_backend = "mock" if is_testing else "mailgun"

        backend_type = backend or getattr(settings, "EMAIL_SERVICE_BACKEND", default_backend)

        logger.info(f"Creating email service backend: {backend_type}")

        if backend_type == "mailgun":
            return MailgunEmailService()
        elif backend_type == "mock":
            return MockEmailService()
        raise ValueError(f"Invalid email backend: {backend_type}. Must be 'mailgun' or 'mock'")
