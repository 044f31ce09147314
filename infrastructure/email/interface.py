"""
Email Service Interface
========================

Abstract base class defining the contract for transactional email.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EmailMessage:
    """
    Represents an email message.

    Attributes:
        subject: Email subject line
        body: Email body (plain text)
        to: List of recipient email addresses
        from_email: Sender email address (optional, uses default if None)
        html_body: HTML version of email body (optional)
        template: Provider-side template name (optional)
        template_vars: Variables substituted into the template
    """

    subject: str
    body: str
    to: List[str]
    from_email: Optional[str] = None
    html_body: Optional[str] = None
    template: Optional[str] = None
    template_vars: Dict[str, Any] = field(default_factory=dict)


class EmailServiceInterface(ABC):
    """
    Abstract interface for email operations.

    Concrete implementations:
        - MailgunEmailService: Mailgun HTTP API
        - MockEmailService: Testing email service that logs instead of sending
    """

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Send a single email message.

        Args:
            message: EmailMessage to send

        Returns:
            True if email sent successfully, False otherwise

        Raises:
            EmailException: If sending fails critically
        """
        pass

    def send_template(
        self,
        to: str,
        template_name: str,
        subject: str,
        template_vars: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Send an email rendered by a provider-side template.

        Args:
            to: Recipient address
            template_name: Template stored at the provider
            subject: Email subject
            template_vars: Variables substituted into the template

        Returns:
            True if email sent successfully

        Raises:
            EmailException: If sending fails
        """
        return self.send(
            EmailMessage(
                subject=subject,
                body="",
                to=[to],
                template=template_name,
                template_vars=template_vars or {},
            )
        )


class EmailException(Exception):
    """Base exception for email operations."""

    pass
