"""
Mock Email Service
==================

Mock implementation of EmailServiceInterface for testing.
Logs email operations instead of actually sending them.
"""

import logging
from typing import List

from .interface import EmailMessage, EmailServiceInterface

logger = logging.getLogger(__name__)


class MockEmailService(EmailServiceInterface):
    """
    Mock email service for testing and development.

    Stores sent messages in memory for verification and always reports success.
    """

    def __init__(self):
        self.sent_messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        logger.info(f"[MOCK EMAIL] To: {message.to}, Subject: {message.subject}, Template: {message.template}")

        self.sent_messages.append(message)
        return True

    def clear_sent_messages(self):
        """Clear the list of sent messages (useful between tests)."""
        self.sent_messages.clear()
