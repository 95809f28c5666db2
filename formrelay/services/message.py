"""Notification email construction for each form variant."""

from datetime import datetime, timezone

from formrelay.config import Settings
from formrelay.models.submission import EmailMessage, FormVariant, Submission


def _timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _metadata_lines(submission: Submission, now: datetime | None) -> list[str]:
    return [
        "Metadata:",
        "---------",
        f"Language: {submission.value_or('language', 'en')}",
        f"Submitted from: {submission.value_or('_page_url', 'Unknown')}",
        f"User Agent: {submission.value_or('_user_agent', 'Unknown')}",
        f"Timestamp: {_timestamp(now)}",
    ]


def partnership_body(
    submission: Submission, sender_name: str, now: datetime | None = None
) -> str:
    s = submission
    lines = [
        "New Partnership Form Submission",
        "================================",
        "",
        "Company Information:",
        "-------------------",
        f"Company Name (Chinese): {s.get('company_name_chinese')}",
        f"Company Name (English): {s.get('company_name_english')}",
        f"Segment(s): {s.value_or('segment', 'Not specified')}",
        f"Year Established: {s.value_or('year_established', 'Not provided')}",
        "",
        "Contact Information:",
        "-------------------",
        f"Primary Phone: {s.value_or('phone', 'Not provided')}",
        f"Primary Email: {s.get('email')}",
        f"Website/Social: {s.value_or('website_social', 'Not provided')}",
        "",
        "Export Information:",
        "------------------",
        "Already exports to Brazil: "
        f"{s.value_or('exports_to_brazil', 'Not specified')}",
        f"Main products exported: {s.value_or('main_products_brazil', 'N/A')}",
        "",
        "Challenges & Support:",
        "--------------------",
        f"Challenges in Brazil: {s.value_or('challenges_brazil', 'Not specified')}",
        "",
        "Support Needed:",
        s.get("support_needed"),
        "",
        *_metadata_lines(s, now),
        "",
        "---",
        f"Sent via {sender_name} Partnership Form",
    ]
    return "\n".join(lines)


def contact_body(
    submission: Submission, sender_name: str, now: datetime | None = None
) -> str:
    s = submission
    lines = [
        "New Contact Form Submission",
        "===========================",
        "",
        "Contact Information:",
        "-------------------",
        f"Name/Company: {s.get('name')}",
        f"Email: {s.get('email')}",
        f"Phone: {s.value_or('phone', 'Not provided')}",
        f"WeChat: {s.value_or('wechat', 'Not provided')}",
        f"Company: {s.value_or('company', 'Not provided')}",
        "",
        "Business Details:",
        "----------------",
        f"Business Type: {s.value_or('business_type', 'Not specified')}",
        f"Products of Interest: {s.value_or('products', 'Not specified')}",
        "",
        "Message:",
        "--------",
        s.get("message"),
        "",
        *_metadata_lines(s, now),
        "",
        "---",
        f"Sent via {sender_name} Contact Form",
    ]
    return "\n".join(lines)


def build_message(
    submission: Submission,
    variant: FormVariant,
    settings: Settings,
    now: datetime | None = None,
) -> EmailMessage:
    """Render the notification email for a validated submission."""
    if variant is FormVariant.PARTNERSHIP:
        company = submission.get("company_name_english")
        return EmailMessage(
            to=settings.recipient_email,
            subject=f"New Partnership: {company} - {settings.sender_name}",
            text=partnership_body(submission, settings.sender_name, now),
            reply_to=submission.get("email"),
            reply_to_name=company,
        )

    name = submission.get("name")
    return EmailMessage(
        to=settings.recipient_email,
        subject=f"New Contact: {name} - {settings.sender_name}",
        text=contact_body(submission, settings.sender_name, now),
        reply_to=submission.get("email"),
        reply_to_name=name,
    )
