"""Form submission models."""

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel


class Outcome(str, Enum):
    """Terminal classification of a single submission."""

    SUCCESS = "success"
    MISSING_FIELDS = "missing_fields"
    INVALID_EMAIL = "invalid_email"
    SEND_FAILED = "send_failed"
    SPAM = "spam"


class FormVariant(str, Enum):
    """Which site form the relay serves."""

    PARTNERSHIP = "partnership"
    CONTACT = "contact"

    @property
    def required_fields(self) -> tuple[str, ...]:
        return REQUIRED_FIELDS[self]


REQUIRED_FIELDS: dict[FormVariant, tuple[str, ...]] = {
    FormVariant.PARTNERSHIP: (
        "company_name_chinese",
        "company_name_english",
        "email",
        "support_needed",
    ),
    FormVariant.CONTACT: ("name", "email", "message"),
}

HONEYPOT_FIELD = "_gotcha"


class Submission:
    """Decoded form fields for one request.

    Wraps the flat field mapping (last value wins on duplicate keys) and
    exposes the lookups the validation and message steps need.
    """

    def __init__(self, fields: Mapping[str, str]) -> None:
        self.fields: dict[str, str] = dict(fields)

    def get(self, name: str, default: str = "") -> str:
        return self.fields.get(name, default)

    def value_or(self, name: str, fallback: str) -> str:
        """Return the field value, or ``fallback`` when missing or blank."""
        value = self.fields.get(name, "")
        return value if value.strip() else fallback

    def is_empty(self, name: str) -> bool:
        """Missing or the empty string; whitespace counts as a value."""
        return not self.fields.get(name, "")

    def is_blank(self, name: str) -> bool:
        return not self.fields.get(name, "").strip()

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __repr__(self) -> str:
        return f"Submission(fields={sorted(self.fields)})"


class EmailMessage(BaseModel):
    """Provider-neutral plaintext notification email."""

    to: str
    subject: str
    text: str
    reply_to: str
    reply_to_name: str = ""


class HandlerResult(BaseModel):
    """Framework-neutral HTTP answer produced by the submission handler."""

    status_code: int
    location: str | None = None
    body: str = ""
    outcome: Outcome | None = None
