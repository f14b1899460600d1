"""SMTP Transport — delivers rendered notifications through an authenticated relay.

Invariants:
    - secure=True → implicit TLS (SMTP_SSL); otherwise STARTTLS when the server offers it
    - Every smtplib/socket failure mapped to NotificationDeliveryError, as are header and
      credential encoding errors (ValueError) raised while building or authenticating
    - Blocking smtplib calls run in a worker thread; the event loop is never blocked

Design Decisions:
    - Connection per message over a pooled session: a handful of e-mails per day
"""

import asyncio
import smtplib
import ssl
from email.message import EmailMessage

from intake.core.errors import NotificationDeliveryError
from intake.core.format_notification import NotificationContent


def build_message(
    content: NotificationContent, sender: str, recipient: str,
) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = content.subject
    msg["From"] = sender
    msg["To"] = recipient
    msg.set_content(content.html, subtype="html")
    return msg


class SmtpTransport:
    """Send one message per connection to a configured SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        secure: bool = False,
        timeout_seconds: float = 15.0,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.secure = secure
        self.timeout_seconds = timeout_seconds

    def _connect(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(
                self.host, self.port, timeout=self.timeout_seconds,
                context=ssl.create_default_context(),
            )
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds)

    def _send_sync(self, msg: EmailMessage) -> None:
        with self._connect() as server:
            if not self.secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=ssl.create_default_context())
                    server.ehlo()
            server.login(self.user, self.password)
            server.send_message(msg)

    async def send(
        self, content: NotificationContent, sender: str, recipient: str,
    ) -> None:
        try:
            msg = build_message(content, sender, recipient)
            await asyncio.to_thread(self._send_sync, msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            raise NotificationDeliveryError(str(e) or type(e).__name__) from e
