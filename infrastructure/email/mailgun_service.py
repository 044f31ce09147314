"""
Mailgun Email Service
=====================

Concrete implementation of EmailServiceInterface using the Mailgun HTTP API.
"""

import logging
from typing import Any, Dict

import requests
from django.conf import settings

from utils.logging_utils import mask_value

from .interface import EmailException, EmailMessage, EmailServiceInterface


logger = logging.getLogger(__name__)


class MailgunEmailService(EmailServiceInterface):
    """
    Mailgun email service implementation.

    Configuration (in settings.py):
        MAILGUN_API_KEY: Private API key
        MAILGUN_DOMAIN: Sending domain
        MAILGUN_API_URL: API base URL (default https://api.mailgun.net/v3)
        MAILGUN_FROM_EMAIL: Default sender address
        EMAIL_HTTP_TIMEOUT: Request timeout in seconds
    """

    def __init__(self):
        """Initialize Mailgun email service."""
        self.api_key = getattr(settings, "MAILGUN_API_KEY", "")
        self.domain = getattr(settings, "MAILGUN_DOMAIN", "")
        self.api_url = getattr(settings, "MAILGUN_API_URL", "https://api.mailgun.net/v3").rstrip("/")
        self.default_from = getattr(settings, "MAILGUN_FROM_EMAIL", "no-reply@example.com")
        self.timeout = getattr(settings, "EMAIL_HTTP_TIMEOUT", 30)

        if not self.api_key or not self.domain:
            logger.warning("MAILGUN_API_KEY or MAILGUN_DOMAIN not configured")

    @property
    def messages_url(self) -> str:
        return f"{self.api_url}/{self.domain}/messages"

    def send(self, message: EmailMessage) -> bool:
        """
        Send a single email through Mailgun.

        Args:
            message: EmailMessage to send

        Returns:
            True if Mailgun accepted the message

        Raises:
            EmailException: If the request fails or Mailgun rejects it
        """
        data = self._build_form(message)

        try:
            response = requests.post(
                self.messages_url,
                auth=("api", self.api_key),
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()

        except requests.RequestException as e:
            logger.error(f"Failed to send email to {[mask_value(to) for to in message.to]}: {str(e)}")
            raise EmailException(f"Email send failed: {str(e)}") from e

        logger.info(f"Email sent successfully to {[mask_value(to) for to in message.to]} (template={message.template})")
        return True

    def _build_form(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Build the Mailgun form payload.

        Template variables are sent as ``v:<name>`` fields.
        """
        data: Dict[str, Any] = {
            "from": message.from_email or self.default_from,
            "to": message.to,
            "subject": message.subject,
        }

        if message.template:
            data["template"] = message.template
            for key, value in message.template_vars.items():
                data[f"v:{key}"] = value
        else:
            data["text"] = message.body
            if message.html_body:
                data["html"] = message.html_body

        return data
