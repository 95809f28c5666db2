"""Form submission handling, independent of the hosting framework.

The FastAPI router and the Azure Functions entry point both translate their
request objects into a call to ``handle_submission`` and translate the
returned ``HandlerResult`` back into a response.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping

from formrelay.config import Settings
from formrelay.models.submission import (
    FormVariant,
    HandlerResult,
    Outcome,
    Submission,
)
from formrelay.services.email_sender import EmailSender
from formrelay.services.message import build_message
from formrelay.services.redirect import redirect_location
from formrelay.services.validation import validate_submission

logger = logging.getLogger(__name__)

FieldDecoder = Callable[[], Awaitable[Mapping[str, str]]]

METHOD_NOT_ALLOWED = HandlerResult(status_code=405, body="Method not allowed")


async def process_submission(
    submission: Submission,
    variant: FormVariant,
    sender: EmailSender,
    settings: Settings,
) -> Outcome:
    """Validate the submission and, if it passes, send one notification email."""
    outcome = validate_submission(submission, variant)
    if outcome is not None:
        return outcome

    message = build_message(submission, variant, settings)
    if not await sender.send(message):
        logger.error("Failed to send email")
        return Outcome.SEND_FAILED

    logger.info("Form submitted successfully")
    return Outcome.SUCCESS


async def handle_submission(
    method: str,
    origin: str | None,
    decode_fields: FieldDecoder,
    sender: EmailSender,
    settings: Settings,
) -> HandlerResult:
    """Run one request through the relay and describe the HTTP answer.

    Non-POST requests are rejected before the body is read. Every POST ends
    in a 302 redirect; unexpected errors are reported as ``send_failed``.
    """
    if method.upper() != "POST":
        return METHOD_NOT_ALLOWED

    variant = FormVariant(settings.form_variant)
    try:
        submission = Submission(await decode_fields())
        outcome = await process_submission(submission, variant, sender, settings)
    except Exception:
        logger.exception("Error processing form")
        outcome = Outcome.SEND_FAILED

    return HandlerResult(
        status_code=302,
        location=redirect_location(origin, outcome, settings.legacy_redirects),
        outcome=outcome,
    )


def text_fields(items: Mapping[str, object]) -> dict[str, str]:
    """Keep the text values of a decoded form, dropping file uploads."""
    return {k: v for k, v in items.items() if isinstance(v, str)}
