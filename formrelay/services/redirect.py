"""Redirect targets that report a submission outcome to the site."""

from formrelay.models.submission import Outcome


def outcome_query(outcome: Outcome, legacy: bool = False) -> str:
    """Query string the front-end reads on load.

    The legacy style only distinguishes success from failure, and reports a
    honeypot hit as a success.
    """
    if outcome is Outcome.SUCCESS:
        return "submitted=true"
    if legacy:
        return "submitted=true" if outcome is Outcome.SPAM else "error=true"
    return f"error={outcome.value}"


def redirect_location(
    origin: str | None, outcome: Outcome, legacy: bool = False
) -> str:
    base = origin or "/"
    return f"{base}?{outcome_query(outcome, legacy)}"
