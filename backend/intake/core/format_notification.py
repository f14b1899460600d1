"""Notification Formatting — subject and HTML body for operator e-mails.

Invariants:
    - Only already-escaped record values are interpolated into HTML
    - Empty optional fields render a placeholder, never an empty tag
    - Submitted time renders in UTC as MM/DD/YYYY, hh:mm:ss AM
    - Subject is a single header line: line breaks in the name collapse to spaces
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from intake.core.domain_types import Record


@dataclass(frozen=True)
class NotificationContent:
    """Rendered e-mail ready for a transport."""
    subject: str
    html: str


def format_submitted_at(timestamp: str) -> str:
    """Render an ISO-8601 timestamp for humans. Unparseable input is returned as-is."""
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(timestamp)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%m/%d/%Y, %I:%M:%S %p")


def _header_safe(value) -> str:
    """Collapse whitespace runs, CR/LF included, so the value fits on one header line."""
    return " ".join(str(value).split())


def format_quote_request(record: Record) -> NotificationContent:
    """Operator notification for a newly stored quote request."""
    html = (
        "<h2>New Quote Request</h2>\n"
        f"<p><strong>Name:</strong> {record['name']}</p>\n"
        f"<p><strong>Email:</strong> {record['email']}</p>\n"
        f"<p><strong>Phone:</strong> {record['phone']}</p>\n"
        f"<p><strong>Address:</strong> {record.get('address') or 'Not provided'}</p>\n"
        f"<p><strong>Service:</strong> {record.get('service') or 'Not specified'}</p>\n"
        "<p><strong>Message:</strong></p>\n"
        f"<p>{record.get('message') or 'No additional message'}</p>\n"
        f"<p><strong>Submitted:</strong> {format_submitted_at(record['timestamp'])}</p>\n"
    )
    return NotificationContent(
        subject=f"New Quote Request from {_header_safe(record['name'])}", html=html,
    )


def format_test_message(business_name: str) -> NotificationContent:
    return NotificationContent(
        subject=f"Test Email - {business_name}",
        html=(
            "<h2>Test Email</h2>"
            f"<p>This is a test email from your {business_name} website.</p>"
        ),
    )
