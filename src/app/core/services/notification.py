"""Welcome email notification for newly onboarded clients."""
import asyncio
import html
import logging
from abc import ABC, abstractmethod

import resend

logger = logging.getLogger(__name__)

WELCOME_HTML_TEMPLATE = "<strong>Hello {name},</strong><br />Welcome to our client portal!"


class NotificationError(Exception):
    """Exception raised when the email provider does not accept a message."""
    pass


class WelcomeNotifier(ABC):
    """Abstract base class for sending the welcome email."""

    @abstractmethod
    async def notify(self, email: str, name: str) -> None:
        """
        Request delivery of the welcome email.

        Returns once the provider has accepted the message; actual delivery
        is not awaited.

        Args:
            email: Recipient address.
            name: Client display name used in the greeting.

        Raises:
            NotificationError: If the provider rejects the request.
        """
        pass


def render_welcome_html(name: str) -> str:
    return WELCOME_HTML_TEMPLATE.format(name=html.escape(name))


class ResendWelcomeNotifier(WelcomeNotifier):
    """Welcome notifier using the Resend email API."""

    def __init__(self, api_key: str | None, from_address: str, subject: str):
        """
        Initialize the Resend notifier.

        Args:
            api_key: Resend API key. When missing every notify() fails.
            from_address: Fixed sender address.
            subject: Fixed subject line.
        """
        if not from_address:
            raise ValueError("Sender address must be specified")
        self.api_key = api_key
        self.from_address = from_address
        self.subject = subject
        if api_key:
            resend.api_key = api_key

    async def notify(self, email: str, name: str) -> None:
        if not self.api_key:
            logger.error("Cannot send welcome email to %s: RESEND_API_KEY is not configured", email)
            raise NotificationError("Email service not configured")

        params = {
            "from": self.from_address,
            "to": [email],
            "subject": self.subject,
            "html": render_welcome_html(name),
        }
        try:
            response = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.error("Resend API error sending welcome email to %s: %s", email, e)
            raise NotificationError(f"Failed to send welcome email: {e}") from e

        logger.info("Welcome email accepted by Resend for %s (id=%s)", email, _message_id(response))


def _message_id(response) -> str | None:
    if isinstance(response, dict):
        return response.get("id")
    return getattr(response, "id", None)
