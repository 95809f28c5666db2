"""Shared fixtures for form-relay tests."""

import httpx
import pytest

from formrelay.models.submission import EmailMessage
from formrelay.services.email_sender import EmailSender

PARTNERSHIP_FORM = {
    "company_name_chinese": "测试公司",
    "company_name_english": "Test Company Ltd",
    "segment": "Electronics",
    "year_established": "2015",
    "phone": "+86 138 0000 0000",
    "email": "test@testcompany.com",
    "website_social": "www.testcompany.com",
    "exports_to_brazil": "yes",
    "main_products_brazil": "LED lights",
    "challenges_brazil": "Finding distributors",
    "support_needed": "Introductions to distributors in São Paulo",
    "language": "zh",
    "_page_url": "https://chinabusinesshub.com/zh/",
    "_user_agent": "Mozilla/5.0",
    "_gotcha": "",
}

CONTACT_FORM = {
    "name": "Maria Silva",
    "email": "maria@example.com.br",
    "message": "Gostaria de mais informações.",
}


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from formrelay.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import formrelay.services.http_client as http_mod

    http_mod._client = None

    # 3. FastAPI dependency overrides
    from formrelay.main import app

    app.dependency_overrides.clear()

    # 4. Azure Functions sender singleton
    import functions.form_relay as fn_mod

    fn_mod._sender = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from formrelay.config import Settings, get_settings
    from formrelay.main import app

    test_settings = Settings(
        environment="test",
        form_variant="partnership",
        email_provider="resend",
        recipient_email="team@example.com",
        sender_name="China Business Hub",
        from_domain="forms.example.com",
        resend_api_key="re_test_key",
        legacy_redirects=False,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("formrelay.config.get_settings", lambda: test_settings)

    # Patch get_settings in all modules that import it directly
    # (from formrelay.config import get_settings creates a local binding that
    # the formrelay.config monkeypatch above does not affect)
    for mod_path in [
        "formrelay.main",
        "formrelay.services.http_client",
        "functions.form_relay",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    # Route dependencies captured the original function at import time
    app.dependency_overrides[get_settings] = lambda: test_settings

    return test_settings


class RecordingSender(EmailSender):
    """EmailSender that records messages instead of calling a provider."""

    name = "recording"

    def __init__(self, settings, result: bool = True, error: Exception | None = None):
        super().__init__(settings)
        self.result = result
        self.error = error
        self.messages: list[EmailMessage] = []

    def endpoint(self) -> str:
        return "memory://"

    def build_payload(self, message):
        return {}

    async def send(self, message: EmailMessage) -> bool:
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def recording_sender(mock_settings):
    return RecordingSender(mock_settings)


@pytest.fixture
def use_sender(mock_settings):
    """Install a sender for the FastAPI route."""
    from formrelay.main import app
    from formrelay.routers.submit import provide_sender

    def _install(sender: EmailSender) -> EmailSender:
        app.dependency_overrides[provide_sender] = lambda: sender
        return sender

    return _install


@pytest.fixture
def partnership_form() -> dict[str, str]:
    return dict(PARTNERSHIP_FORM)


@pytest.fixture
def contact_form() -> dict[str, str]:
    return dict(CONTACT_FORM)


class FakeProvider:
    """Email provider endpoint answered by an httpx MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={"id": "email_1"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def respond(self, handler) -> None:
        self.handler = handler


@pytest.fixture
async def provider(monkeypatch):
    """Route the relay's outbound client (and only it) to a fake provider."""
    fake = FakeProvider()
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
    monkeypatch.setattr(
        "formrelay.services.email_sender.get_shared_client", lambda: client
    )
    yield fake
    await client.aclose()
