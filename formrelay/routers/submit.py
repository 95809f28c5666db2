"""Form submission endpoint.

The site's contact form posts here directly (no JavaScript), so every answer
is a redirect back to the submitting page with the outcome in the query.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from formrelay.config import Settings, get_settings
from formrelay.services.email_sender import EmailSender, get_email_sender
from formrelay.services.submission import handle_submission, text_fields

router = APIRouter(tags=["submit"])
logger = logging.getLogger(__name__)


def provide_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    return get_email_sender(settings)


@router.post("/")
async def submit_form(
    request: Request,
    settings: Settings = Depends(get_settings),
    sender: EmailSender = Depends(provide_sender),
) -> Response:
    """Validate a form post, relay it by email and redirect back."""

    async def decode_fields() -> dict[str, str]:
        form = await request.form()
        return text_fields(dict(form.items()))

    result = await handle_submission(
        request.method,
        request.headers.get("origin"),
        decode_fields,
        sender,
        settings,
    )
    return RedirectResponse(url=result.location or "/", status_code=result.status_code)


@router.api_route("/", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def reject_method(request: Request) -> Response:
    """Anything but POST is refused without reading the body."""
    logger.info("Rejected %s request", request.method)
    return PlainTextResponse(
        "Method not allowed", status_code=405, headers={"Allow": "POST"}
    )
