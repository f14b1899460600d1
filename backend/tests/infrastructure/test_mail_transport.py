"""SMTP Transport — connection handshake and error mapping with a fake smtplib."""

import smtplib

import pytest

from intake.core.errors import NotificationDeliveryError
from intake.core.format_notification import NotificationContent
from intake.infrastructure.mail_transport import SmtpTransport, build_message

CONTENT = NotificationContent(subject="New Quote Request from Jane", html="<h2>Hi</h2>")


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []
    offer_starttls = True
    fail_login = False
    fail_login_encoding = False

    def __init__(self, host, port, timeout=None, context=None):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls: list[str] = []
        self.sent = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def has_extn(self, name):
        return self.offer_starttls and name == "starttls"

    def starttls(self, context=None):
        self.calls.append("starttls")

    def login(self, user, password):
        if self.fail_login_encoding:
            raise UnicodeEncodeError("ascii", password, 0, 1, "ordinal not in range(128)")
        if self.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"bad credentials")
        self.calls.append(f"login:{user}")

    def send_message(self, msg):
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    _FakeSMTP.offer_starttls = True
    _FakeSMTP.fail_login = False
    _FakeSMTP.fail_login_encoding = False
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
    return _FakeSMTP


def _transport(secure=False):
    return SmtpTransport("smtp.example.com", 587, "mailer", "pw", secure=secure)


def test_build_message_is_html():
    msg = build_message(CONTENT, "from@example.com", "to@example.com")
    assert msg["Subject"] == "New Quote Request from Jane"
    assert msg["From"] == "from@example.com"
    assert msg["To"] == "to@example.com"
    assert msg.get_content_type() == "text/html"


async def test_plain_connection_upgrades_with_starttls(fake_smtp):
    await _transport().send(CONTENT, "from@example.com", "to@example.com")
    server = fake_smtp.instances[0]
    assert server.calls == ["ehlo", "starttls", "ehlo", "login:mailer", "quit"]
    assert len(server.sent) == 1
    assert server.timeout == 15.0


async def test_no_starttls_when_not_offered(fake_smtp):
    fake_smtp.offer_starttls = False
    await _transport().send(CONTENT, "from@example.com", "to@example.com")
    assert "starttls" not in fake_smtp.instances[0].calls


async def test_secure_connection_skips_starttls(fake_smtp):
    await _transport(secure=True).send(CONTENT, "from@example.com", "to@example.com")
    assert fake_smtp.instances[0].calls == ["login:mailer", "quit"]


async def test_smtp_errors_become_delivery_errors(fake_smtp):
    fake_smtp.fail_login = True
    with pytest.raises(NotificationDeliveryError):
        await _transport().send(CONTENT, "from@example.com", "to@example.com")


async def test_connection_errors_become_delivery_errors(monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(smtplib, "SMTP", refuse)
    with pytest.raises(NotificationDeliveryError):
        await _transport().send(CONTENT, "from@example.com", "to@example.com")


async def test_unencodable_header_becomes_delivery_error(fake_smtp):
    content = NotificationContent(subject="Line one\nBcc: victim@example.com", html="<p>x</p>")
    with pytest.raises(NotificationDeliveryError):
        await _transport().send(content, "from@example.com", "to@example.com")
    assert fake_smtp.instances == []


async def test_credential_encoding_errors_become_delivery_errors(fake_smtp):
    fake_smtp.fail_login_encoding = True
    with pytest.raises(NotificationDeliveryError):
        await _transport().send(CONTENT, "from@example.com", "to@example.com")
