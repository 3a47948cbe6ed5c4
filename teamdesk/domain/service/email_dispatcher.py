"""Invitation email dispatch.

Delivery is best effort: the verification record is the source of truth and
the returned link works whatever happens to the email. Transient transport
failures are retried with exponential backoff; permanent ones are not.
"""

import asyncio
from html import escape

import logfire
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from teamdesk.config import EmailSettings
from teamdesk.domain.error import (
    EmailDeliveryError,
    PermanentTransportError,
    TransientTransportError,
    TransportError,
)
from teamdesk.domain.model.verification import Verification
from teamdesk.domain.value import Role
from teamdesk.domain.value.common import ValueObject

from .base import Service

ROLE_LABELS = {
    Role.ADMIN: "an administrator",
    Role.TEAM: "a team member",
    Role.CLIENT: "a client",
}


class EmailMessage(ValueObject):
    """Outbound email."""

    to: str
    subject: str
    body: str
    html: str | None = None


class EmailTransport:
    """Generic email transport interface."""

    async def send(self, message: EmailMessage) -> None:
        """Submit a message for delivery.

        Args:
            message: Message to send

        Raises:
            TransientTransportError: On failures worth retrying
            PermanentTransportError: On failures that will not go away
        """
        raise NotImplementedError


class DeliveryOutcome(BaseModel):
    """Result of one invitation email dispatch."""

    recipient: str
    delivered: bool
    attempts: int
    error: str | None = None


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a failed attempt before backing off."""
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
    logfire.warn(
        "Email transport failed, retrying",
        attempt=retry_state.attempt_number,
        wait_seconds=round(wait_time, 2),
        error=str(exc) if exc else None,
        error_type=type(exc).__name__ if exc else None,
    )


class EmailDispatcher(Service):
    """Composes and delivers invitation emails in the background."""

    def __init__(self, transport: EmailTransport, email_settings: EmailSettings) -> None:
        """Initialize email dispatcher.

        Args:
            transport: Email transport implementation
            email_settings: Retry policy and sender configuration
        """
        self.transport = transport
        self.email_settings = email_settings
        self._pending: set[asyncio.Task[DeliveryOutcome]] = set()
        self._failures = logfire.metric_counter(
            "email_delivery_failures",
            unit="1",
            description="Invitation emails not delivered after retries",
        )

    def compose_invite(self, verification: Verification, link: str) -> EmailMessage:
        """Build the invitation email for a verification."""
        greeting = f"Welcome {verification.name}!" if verification.name else "Welcome!"
        role = ROLE_LABELS[verification.role]
        expires = verification.expires_at.strftime("%Y-%m-%d %H:%M UTC")

        body = (
            f"{greeting}\n\n"
            f"You have been invited to join the workspace as {role}.\n"
            f"Accept the invitation here:\n\n{link}\n\n"
            f"This link expires on {expires}."
        )
        html = (
            f"<p>{escape(greeting)}</p>"
            f"<p>You have been invited to join the workspace as {escape(role)}.</p>"
            f'<p><a href="{escape(link, quote=True)}">Accept the invitation</a></p>'
            f"<p>This link expires on {escape(expires)}.</p>"
        )
        return EmailMessage(
            to=verification.email.root,
            subject="You are invited to the team!",
            body=body,
            html=html,
        )

    def _retrying(self) -> AsyncRetrying:
        policy = self.email_settings
        return AsyncRetrying(
            stop=stop_after_attempt(max(1, policy.max_attempts)),
            wait=wait_exponential(
                multiplier=policy.backoff_base_seconds,
                max=policy.backoff_max_seconds,
            ),
            retry=retry_if_exception_type(TransientTransportError),
            before_sleep=_log_retry,
            reraise=True,
        )

    async def send_invite(self, verification: Verification, link: str) -> DeliveryOutcome:
        """Deliver the invitation email, retrying transient failures.

        Never raises for transport failures: they end up as a logged
        EmailDeliveryError and a failed outcome.

        Args:
            verification: Verification the email is about
            link: Invitation link embedded in the message

        Returns:
            Delivery outcome
        """
        message = self.compose_invite(verification, link)
        attempts = 0

        with logfire.span(
            "email_dispatcher.send_invite",
            recipient=message.to,
            verification_id=str(verification.id),
        ):
            try:
                async for attempt in self._retrying():
                    with attempt:
                        attempts = attempt.retry_state.attempt_number
                        await self.transport.send(message)
            except TransportError as e:
                error = EmailDeliveryError(message.to, attempts, str(e))
                self._failures.add(1)
                logfire.error(
                    "Invitation email not delivered",
                    recipient=message.to,
                    attempts=attempts,
                    permanent=isinstance(e, PermanentTransportError),
                    error=str(error),
                )
                return DeliveryOutcome(
                    recipient=message.to,
                    delivered=False,
                    attempts=attempts,
                    error=str(error),
                )

            logfire.info(
                "Invitation email delivered", recipient=message.to, attempts=attempts
            )
            return DeliveryOutcome(recipient=message.to, delivered=True, attempts=attempts)

    def schedule(
        self, verification: Verification, link: str
    ) -> asyncio.Task[DeliveryOutcome]:
        """Start delivery in the background and return immediately.

        Must be called from a running event loop.
        """
        task = asyncio.create_task(self._deliver(verification, link))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> list[DeliveryOutcome]:
        """Wait for every in-flight delivery to finish."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*self._pending))

    async def _deliver(self, verification: Verification, link: str) -> DeliveryOutcome:
        try:
            return await self.send_invite(verification, link)
        except Exception as e:
            # Background task: nothing above us would observe the exception
            self._failures.add(1)
            logfire.exception(
                "Unexpected error dispatching invitation email",
                recipient=verification.email.root,
            )
            return DeliveryOutcome(
                recipient=verification.email.root,
                delivered=False,
                attempts=0,
                error=str(e),
            )
