"""Unit tests for the SMTP email transport."""

import smtplib
import socket

import pytest

from teamdesk.adapter.error import EmailConfigurationError
from teamdesk.adapter.smtp import (
    ConsoleEmailTransport,
    SmtpEmailTransport,
    classify_smtp_error,
)
from teamdesk.adapter.smtp import client as smtp_client
from teamdesk.config import EmailSettings
from teamdesk.domain.error import PermanentTransportError, TransientTransportError
from teamdesk.domain.service import EmailMessage

MESSAGE = EmailMessage(
    to="ann@example.com",
    subject="You are invited to the team!",
    body="plain",
    html="<p>html</p>",
)


class TestClassifySmtpError:
    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPConnectError(421, b"busy"),
            smtplib.SMTPServerDisconnected("gone"),
            smtplib.SMTPAuthenticationError(454, b"temporary auth failure"),
            smtplib.SMTPResponseException(451, b"local error"),
            socket.timeout("timed out"),
            ConnectionRefusedError(111, "refused"),
        ],
    )
    def test_transient(self, error):
        assert isinstance(classify_smtp_error(error), TransientTransportError)

    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPRecipientsRefused({"ann@example.com": (550, b"no such user")}),
            smtplib.SMTPSenderRefused(553, b"bad sender", "me@example.com"),
            smtplib.SMTPResponseException(554, b"rejected"),
            smtplib.SMTPNotSupportedError("no STARTTLS"),
        ],
    )
    def test_permanent(self, error):
        assert isinstance(classify_smtp_error(error), PermanentTransportError)


class FakeSMTP:
    """Stands in for smtplib.SMTP / SMTP_SSL."""

    instances: list["FakeSMTP"] = []
    error: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def has_extn(self, name):
        return name == "starttls"

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, secret):
        self.calls.append(f"login:{user}")

    def send_message(self, message):
        if FakeSMTP.error is not None:
            raise FakeSMTP.error
        self.sent.append(message)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.error = None
    monkeypatch.setattr(smtp_client.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(smtp_client.smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP


class TestSmtpEmailTransport:
    def test_requires_host(self):
        with pytest.raises(EmailConfigurationError):
            SmtpEmailTransport(EmailSettings())

    @pytest.mark.asyncio
    async def test_send_with_starttls_and_login(self, fake_smtp):
        settings = EmailSettings(
            host="smtp.example.com",
            port=587,
            auth_user="mailer@example.com",
            auth_secret="secret",
        )

        await SmtpEmailTransport(settings).send(MESSAGE)

        smtp = fake_smtp.instances[0]
        assert (smtp.host, smtp.port) == ("smtp.example.com", 587)
        assert smtp.calls == ["ehlo", "starttls", "ehlo", "login:mailer@example.com"]
        sent = smtp.sent[0]
        assert sent["To"] == "ann@example.com"
        assert sent["From"] == "mailer@example.com"
        assert sent.is_multipart()

    @pytest.mark.asyncio
    async def test_implicit_tls_skips_starttls(self, fake_smtp):
        settings = EmailSettings(host="smtp.example.com", port=465, secure=True)

        await SmtpEmailTransport(settings).send(MESSAGE)

        smtp = fake_smtp.instances[0]
        assert "starttls" not in smtp.calls
        assert smtp.sent[0]["From"] == "no-reply@smtp.example.com"

    @pytest.mark.asyncio
    async def test_refused_recipient_is_permanent(self, fake_smtp):
        fake_smtp.error = smtplib.SMTPRecipientsRefused(
            {"ann@example.com": (550, b"no such user")}
        )
        transport = SmtpEmailTransport(EmailSettings(host="smtp.example.com"))

        with pytest.raises(PermanentTransportError):
            await transport.send(MESSAGE)

    @pytest.mark.asyncio
    async def test_disconnect_is_transient(self, fake_smtp):
        fake_smtp.error = smtplib.SMTPServerDisconnected("closed")
        transport = SmtpEmailTransport(EmailSettings(host="smtp.example.com"))

        with pytest.raises(TransientTransportError):
            await transport.send(MESSAGE)


@pytest.mark.asyncio
async def test_console_transport_accepts_everything():
    await ConsoleEmailTransport().send(MESSAGE)
