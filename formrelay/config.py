"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # Form
    form_variant: Literal["partnership", "contact"] = "partnership"
    legacy_redirects: bool = False  # deprecated: error=true for every failure

    # Delivery
    email_provider: Literal["resend", "mailchannels"] = "resend"
    recipient_email: str = "contato@chinabusinesshub.com"
    sender_name: str = "China Business Hub"
    from_domain: str = "chinabh-github-io.pages.dev"

    # Resend
    resend_api_key: str = ""

    # MailChannels (DKIM-domain trust, no API key)
    dkim_selector: str = "mailchannels"

    # Outbound HTTP
    http_timeout: float = 15.0

    model_config = {"env_file": ".env", "extra": "ignore"}

    def configuration_problems(self) -> list[str]:
        """Return misconfigurations that make every submission fail."""
        problems: list[str] = []
        if self.email_provider == "resend" and not self.resend_api_key:
            problems.append("RESEND_API_KEY not set")
        if not self.recipient_email:
            problems.append("RECIPIENT_EMAIL is empty")
        return problems


@lru_cache
def get_settings() -> Settings:
    return Settings()
