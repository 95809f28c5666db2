"""Ordered submission checks.

Each check returns the failing ``Outcome`` or ``None``; ``validate_submission``
runs them in order and stops at the first failure.
"""

import logging
import re
from collections.abc import Callable

from formrelay.models.submission import (
    HONEYPOT_FIELD,
    FormVariant,
    Outcome,
    Submission,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

Check = Callable[[Submission, FormVariant], Outcome | None]


def check_honeypot(submission: Submission, variant: FormVariant) -> Outcome | None:
    if not submission.is_blank(HONEYPOT_FIELD):
        logger.warning("Spam blocked via honeypot")
        return Outcome.SPAM
    return None


def check_required_fields(
    submission: Submission, variant: FormVariant
) -> Outcome | None:
    missing = [f for f in variant.required_fields if submission.is_empty(f)]
    if missing:
        logger.warning("Missing required fields: %s", ", ".join(missing))
        return Outcome.MISSING_FIELDS
    return None


def is_valid_email(value: str) -> bool:
    """Basic ``local@domain.tld`` shape check, no whitespace."""
    return EMAIL_PATTERN.fullmatch(value) is not None


def check_email_format(
    submission: Submission, variant: FormVariant
) -> Outcome | None:
    if not is_valid_email(submission.get("email")):
        logger.warning("Invalid email format")
        return Outcome.INVALID_EMAIL
    return None


CHECKS: tuple[Check, ...] = (
    check_honeypot,
    check_required_fields,
    check_email_format,
)


def validate_submission(
    submission: Submission, variant: FormVariant
) -> Outcome | None:
    """Return the first failing outcome, or None when the submission is valid."""
    for check in CHECKS:
        outcome = check(submission, variant)
        if outcome is not None:
            return outcome
    return None
