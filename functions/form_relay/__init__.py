"""Azure Functions HTTP trigger for the form relay.

Serverless counterpart of ``formrelay.routers.submit``: adapts the Functions
request/response types to ``handle_submission`` so both deployments share
validation, delivery and redirect behaviour.

Configuration comes from the Function App settings (same variable names as
the API: ``EMAIL_PROVIDER``, ``RECIPIENT_EMAIL``, ``RESEND_API_KEY``, ...).
"""

import logging

import azure.functions as func

from formrelay.config import get_settings
from formrelay.services.email_sender import EmailSender, get_email_sender
from formrelay.services.submission import handle_submission

logger = logging.getLogger(__name__)

_sender: EmailSender | None = None


def get_sender() -> EmailSender:
    """Build the sender once per worker process, logging config problems."""
    global _sender
    if _sender is None:
        settings = get_settings()
        for problem in settings.configuration_problems():
            logger.error("Configuration problem: %s", problem)
        _sender = get_email_sender(settings)
    return _sender


def form_fields(req: func.HttpRequest) -> dict[str, str]:
    """Decode url-encoded or multipart fields; last value wins."""
    return {key: values[-1] for key, values in req.form.lists() if values}


async def main(req: func.HttpRequest) -> func.HttpResponse:
    logger.info("Form relay triggered (%s)", req.method)

    async def decode_fields() -> dict[str, str]:
        return form_fields(req)

    result = await handle_submission(
        req.method,
        req.headers.get("origin"),
        decode_fields,
        get_sender(),
        get_settings(),
    )

    if result.location is None:
        return func.HttpResponse(
            result.body, status_code=result.status_code, headers={"Allow": "POST"}
        )
    return func.HttpResponse(
        status_code=result.status_code, headers={"Location": result.location}
    )
