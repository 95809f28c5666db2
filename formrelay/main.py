"""
Form Relay API

Receives the marketing site's contact form posts, emails them to the team
and redirects the visitor back with the outcome.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from formrelay.config import get_settings
from formrelay.middleware import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from formrelay.routers import submit
from formrelay.services.email_sender import get_email_sender
from formrelay.services.http_client import close_shared_client

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def configure_logging(debug: bool = False) -> None:
    """Root logging with the request ID on every line."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDLogFilter) for f in handler.filters):
            handler.addFilter(RequestIDLogFilter())


def check_configuration() -> list[str]:
    """Log configuration problems once. Returns the problems found."""
    settings = get_settings()
    # Raises on an unknown provider: the relay cannot start without one.
    get_email_sender(settings)
    problems = settings.configuration_problems()
    for problem in problems:
        logger.error("Configuration problem: %s", problem)
    return problems


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    configure_logging(get_settings().debug)
    check_configuration()
    yield
    await close_shared_client()


app = FastAPI(
    title="Form Relay",
    description="Relays website form submissions to the team inbox",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)
# Request ID runs first (outermost middleware)
app.add_middleware(RequestIDMiddleware)

# Routers
app.include_router(submit.router)


def _health() -> dict[str, Any]:
    settings = get_settings()
    checks = {"config": "fail" if settings.configuration_problems() else "ok"}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "form-relay",
        "version": VERSION,
        "provider": settings.email_provider,
        "checks": checks,
    }


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check reporting whether the relay can deliver email."""
    return JSONResponse(content=_health(), status_code=200)
