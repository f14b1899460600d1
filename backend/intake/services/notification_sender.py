"""Notification Sender — best-effort operator e-mail for new quote requests.

Invariants:
    - notify_quote_request NEVER raises: outcome is SENT, FAILED or SKIPPED
    - No transport configured → SKIPPED, logged once at startup, not per request
    - send_test_message propagates NotificationDeliveryError: the caller is an operator
"""

import logging

from intake.core.domain_types import EmailStatus, Record
from intake.core.errors import NotificationDeliveryError
from intake.core.format_notification import format_quote_request, format_test_message
from intake.core.repository_protocols import MailTransport

logger = logging.getLogger(__name__)


class NotificationSender:
    """Formats and dispatches operator notifications through an optional transport."""

    def __init__(
        self,
        transport: MailTransport | None,
        sender: str,
        recipient: str,
        business_name: str,
    ):
        self.transport = transport
        self.sender = sender
        self.recipient = recipient
        self.business_name = business_name

    @property
    def configured(self) -> bool:
        return self.transport is not None

    async def notify_quote_request(self, record: Record) -> EmailStatus:
        if self.transport is None:
            return EmailStatus.SKIPPED
        try:
            await self.transport.send(
                format_quote_request(record), self.sender, self.recipient,
            )
        except NotificationDeliveryError as e:
            logger.error(
                f"Error sending email: {e.message}",
                extra={"record_id": record.get("id"), "error_code": e.code},
            )
            return EmailStatus.FAILED
        logger.info(
            "Email sent for request",
            extra={"record_id": record.get("id"), "email_status": EmailStatus.SENT.value},
        )
        return EmailStatus.SENT

    async def send_test_message(self) -> bool:
        """False if no transport is configured; raises on delivery failure."""
        if self.transport is None:
            return False
        await self.transport.send(
            format_test_message(self.business_name), self.sender, self.recipient,
        )
        return True
