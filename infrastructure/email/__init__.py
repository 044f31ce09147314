"""
Email Service Abstraction Layer
================================

Provides a unified interface for transactional email across providers.
"""

from .factory import EmailFactory
from .interface import EmailException, EmailMessage, EmailServiceInterface
from .mailgun_service import MailgunEmailService
from .mock_service import MockEmailService

__all__ = [
    "EmailServiceInterface",
    "EmailMessage",
    "EmailException",
    "MailgunEmailService",
    "MockEmailService",
    "EmailFactory",
]
