"""Unit tests for EmailDispatcher."""

import asyncio

import pytest

from teamdesk.adapter.smtp import MockEmailTransport
from teamdesk.domain.error import PermanentTransportError, TransientTransportError
from teamdesk.domain.service import EmailDispatcher, EmailMessage, EmailTransport
from teamdesk.domain.value import Role
from tests.factories import make_verification

LINK = "http://localhost:3000/invite/abc"


@pytest.fixture
def transport() -> MockEmailTransport:
    return MockEmailTransport()


@pytest.fixture
def dispatcher(transport, fast_email_settings) -> EmailDispatcher:
    return EmailDispatcher(transport=transport, email_settings=fast_email_settings)


class TestCompose:
    def test_message_embeds_name_role_and_link(self, dispatcher):
        verification = make_verification("ann@example.com", role=Role.CLIENT)

        message = dispatcher.compose_invite(verification, LINK)

        assert message.to == "ann@example.com"
        assert "Welcome Seeded!" in message.body
        assert "as a client" in message.body
        assert LINK in message.body
        assert f'href="{LINK}"' in message.html

    def test_html_escapes_name(self, dispatcher):
        verification = make_verification("ann@example.com").model_copy(
            update={"name": "<b>Ann</b>"}
        )

        message = dispatcher.compose_invite(verification, LINK)

        assert "<b>Ann</b>" not in message.html
        assert "&lt;b&gt;Ann&lt;/b&gt;" in message.html


class TestSendInvite:
    @pytest.mark.asyncio
    async def test_delivered_first_try(self, dispatcher, transport):
        outcome = await dispatcher.send_invite(make_verification("a@example.com"), LINK)

        assert outcome.delivered is True
        assert outcome.attempts == 1
        assert len(transport.sent) == 1

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, dispatcher, transport):
        transport.fail_next(TransientTransportError("421 try later"))

        outcome = await dispatcher.send_invite(make_verification("a@example.com"), LINK)

        assert outcome.delivered is True
        assert outcome.attempts == 2
        assert transport.calls == 2

    @pytest.mark.asyncio
    async def test_permanent_failure_is_not_retried(self, dispatcher, transport):
        transport.fail_next(PermanentTransportError("550 no such user"))

        outcome = await dispatcher.send_invite(make_verification("a@example.com"), LINK)

        assert outcome.delivered is False
        assert outcome.attempts == 1
        assert transport.calls == 1
        assert "550 no such user" in outcome.error

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, dispatcher, transport):
        transport.fail_next(*[TransientTransportError("timeout")] * 5)

        outcome = await dispatcher.send_invite(make_verification("a@example.com"), LINK)

        assert outcome.delivered is False
        assert outcome.attempts == 3
        assert transport.calls == 3
        assert transport.sent == []


class SlowTransport(EmailTransport):
    """Transport that blocks until released."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        await self.release.wait()
        self.sent.append(message)


class BrokenTransport(EmailTransport):
    async def send(self, message: EmailMessage) -> None:
        raise RuntimeError("bug in transport")


class TestSchedule:
    @pytest.mark.asyncio
    async def test_schedule_returns_before_delivery(self, fast_email_settings):
        transport = SlowTransport()
        dispatcher = EmailDispatcher(transport, fast_email_settings)

        task = dispatcher.schedule(make_verification("a@example.com"), LINK)
        await asyncio.sleep(0)

        assert not task.done()
        assert transport.sent == []

        transport.release.set()
        outcomes = await dispatcher.drain()

        assert [o.delivered for o in outcomes] == [True]
        assert len(transport.sent) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, fast_email_settings):
        dispatcher = EmailDispatcher(BrokenTransport(), fast_email_settings)

        task = dispatcher.schedule(make_verification("a@example.com"), LINK)
        outcome = await task

        assert outcome.delivered is False
        assert "bug in transport" in outcome.error

    @pytest.mark.asyncio
    async def test_drain_with_nothing_pending(self, dispatcher):
        assert await dispatcher.drain() == []
