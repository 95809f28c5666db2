"""Transactional email providers.

Both providers implement the same ``EmailSender`` capability: one coroutine
that returns True when the provider accepted the message. Provider and
network failures are logged and reported as False, never raised.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from formrelay.config import Settings
from formrelay.models.submission import EmailMessage
from formrelay.services.http_client import get_shared_client

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
MAILCHANNELS_URL = "https://api.mailchannels.net/tx/v1/send"


class EmailSender(ABC):
    """Delivers one notification email."""

    name: str = "email"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def from_address(self) -> str:
        return f"noreply@{self.settings.from_domain}"

    @abstractmethod
    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        """Return the provider's JSON request body."""

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    @abstractmethod
    def endpoint(self) -> str: ...

    def ready(self) -> bool:
        """False when credentials are missing and no request should be made."""
        return True

    def log_accepted(self, resp: httpx.Response) -> None:
        logger.info("Email accepted by %s (%d)", self.name, resp.status_code)

    async def send(self, message: EmailMessage) -> bool:
        if not self.ready():
            return False

        client = get_shared_client()
        try:
            resp = await client.post(
                self.endpoint(),
                headers=self.headers(),
                json=self.build_payload(message),
            )
        except httpx.HTTPError as e:
            logger.error("%s request failed: %s", self.name, e)
            return False

        if not resp.is_success:
            logger.error("%s API error: %d %s", self.name, resp.status_code, resp.text)
            return False

        self.log_accepted(resp)
        return True


class ResendSender(EmailSender):
    """Resend API (bearer-token authenticated)."""

    name = "Resend"

    def endpoint(self) -> str:
        return RESEND_URL

    def ready(self) -> bool:
        if not self.settings.resend_api_key:
            logger.error("RESEND_API_KEY not set")
            return False
        return True

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.resend_api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        return {
            "from": f"{self.settings.sender_name} <{self.from_address}>",
            "to": [message.to],
            "subject": message.subject,
            "reply_to": message.reply_to,
            "text": message.text,
        }

    def log_accepted(self, resp: httpx.Response) -> None:
        try:
            data = resp.json()
        except ValueError:
            data = None
        email_id = data.get("id", "") if isinstance(data, dict) else ""
        logger.info("Email sent successfully: %s", email_id or "(no id)")


class MailChannelsSender(EmailSender):
    """MailChannels transactional API (trust via DKIM domain, no API key)."""

    name = "MailChannels"

    def endpoint(self) -> str:
        return MAILCHANNELS_URL

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        form_label = self.settings.form_variant.capitalize()
        return {
            "personalizations": [
                {
                    "to": [{"email": message.to}],
                    "dkim_domain": self.settings.from_domain,
                    "dkim_selector": self.settings.dkim_selector,
                }
            ],
            "from": {
                "email": self.from_address,
                "name": f"{self.settings.sender_name} {form_label} Form",
            },
            "reply_to": {
                "email": message.reply_to,
                "name": message.reply_to_name,
            },
            "content": [{"type": "text/plain", "value": message.text}],
        }


_SENDERS: dict[str, type[EmailSender]] = {
    "resend": ResendSender,
    "mailchannels": MailChannelsSender,
}


def get_email_sender(settings: Settings) -> EmailSender:
    """Build the sender configured by ``EMAIL_PROVIDER``."""
    try:
        sender_cls = _SENDERS[settings.email_provider]
    except KeyError:
        raise ValueError(
            f"Unknown email provider: {settings.email_provider!r}"
        ) from None
    return sender_cls(settings)
