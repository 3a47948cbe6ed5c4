"""Invitation domain service."""

import secrets
from datetime import timedelta
from typing import Any, Mapping
from uuid import uuid4

import logfire
from pydantic import BaseModel, ValidationError as SchemaValidationError

from teamdesk.config import Settings
from teamdesk.domain.error import (
    DuplicateUserError,
    PersistenceError,
    TokenAlreadyConsumedError,
    TokenExpiredError,
    TokenNotFoundError,
    ValidationError,
)
from teamdesk.domain.model import User, Verification
from teamdesk.domain.model.common import utc_now
from teamdesk.domain.repository import UserRepository, VerificationRepository
from teamdesk.domain.value import (
    Email,
    Permissions,
    Role,
    UserId,
    VerificationId,
    VerificationStatus,
    VerificationToken,
)

from .base import Service
from .email_dispatcher import EmailDispatcher
from .permission_service import PermissionService

# 32 random bytes -> 256 bits of entropy
TOKEN_BYTES = 32


class IssuedInvitation(BaseModel):
    """Result of issuing an invitation."""

    token: str
    link: str
    verification: Verification


class InvitationService(Service):
    """Domain service for the invite / consume lifecycle."""

    def __init__(
        self,
        user_repository: UserRepository,
        verification_repository: VerificationRepository,
        permission_service: PermissionService,
        email_dispatcher: EmailDispatcher,
        settings: Settings,
    ) -> None:
        """Initialize invitation service.

        Args:
            user_repository: User repository
            verification_repository: Verification repository
            permission_service: Role/permission validation
            email_dispatcher: Background invitation email delivery
            settings: Application settings (token TTL, link base)
        """
        self.user_repository = user_repository
        self.verification_repository = verification_repository
        self.permission_service = permission_service
        self.email_dispatcher = email_dispatcher
        self.settings = settings

    async def invite(
        self,
        name: str,
        email: str,
        role: Role | str,
        permissions: Permissions | Mapping[str, Any] | None = None,
    ) -> IssuedInvitation:
        """Issue (or re-issue) an invitation for an email.

        Re-inviting a pending email replaces its token; the previous token
        stops working immediately. Email delivery is scheduled in the
        background and never affects the result.

        Args:
            name: Invitee display name
            email: Invitee email address
            role: Role to grant on acceptance
            permissions: Permission flags to grant on acceptance

        Returns:
            Token and link for the stored verification

        Raises:
            ValidationError: If the email, role or permissions are invalid
            DuplicateUserError: If an active user already owns the email
        """
        with logfire.span("invitation_service.invite", email=email, role=str(role)):
            address = self._parse_email(email)
            granted_role = self._parse_role(role)
            granted = self.permission_service.validate(granted_role, permissions)

            existing = await self.user_repository.find_by_email(address)
            if existing and existing.active:
                logfire.warn("Invite rejected, user exists", email=address.root)
                raise DuplicateUserError(address.root)

            now = utc_now()
            verification = Verification(
                id=VerificationId(uuid4()),
                email=address,
                name=name.strip(),
                token=VerificationToken(root=secrets.token_urlsafe(TOKEN_BYTES)),
                role=granted_role,
                permissions=granted,
                status=VerificationStatus.PENDING,
                created_at=now,
                expires_at=now + timedelta(days=self.settings.invitations.token_ttl_days),
            )

            stored = await self.verification_repository.upsert_pending(verification)
            link = self.settings.invitation_link(stored.token.root)

            self.email_dispatcher.schedule(stored, link)

            logfire.info(
                "Invitation issued",
                verification_id=str(stored.id),
                email=address.root,
                role=granted_role.value,
                reissued=stored.id != verification.id,
                expires_at=stored.expires_at.isoformat(),
            )
            return IssuedInvitation(token=stored.token.root, link=link, verification=stored)

    async def consume(self, token: str) -> User:
        """Accept an invitation and activate the invited user.

        Only one caller can win the pending -> consumed transition for a
        token; everyone else gets TokenAlreadyConsumedError.

        Args:
            token: Invitation token

        Returns:
            The created or activated user

        Raises:
            TokenNotFoundError: If no verification matches the token
            TokenExpiredError: If the verification is past its expiry
            TokenAlreadyConsumedError: If the verification was already used
            DuplicateUserError: If an active user already owns the email
        """
        value = self._parse_token(token)

        with logfire.span("invitation_service.consume", token=value.redacted):
            verification = await self.verification_repository.find_by_token(value)
            if verification is None:
                logfire.warn("Invitation not found", token=value.redacted)
                raise TokenNotFoundError(token)

            if verification.status == VerificationStatus.CONSUMED:
                logfire.warn(
                    "Invitation already consumed",
                    verification_id=str(verification.id),
                    consumed_at=verification.consumed_at,
                )
                raise TokenAlreadyConsumedError(token)

            now = utc_now()
            if verification.is_expired(now):
                logfire.info(
                    "Invitation expired",
                    verification_id=str(verification.id),
                    expires_at=verification.expires_at.isoformat(),
                )
                raise TokenExpiredError(token)

            existing = await self.user_repository.find_by_email(verification.email)
            if existing and existing.active:
                raise DuplicateUserError(verification.email.root)

            user_id = existing.id if existing else UserId(uuid4())

            consumed = await self.verification_repository.mark_consumed(
                value, now, user_id
            )
            if consumed is None:
                # Lost the race, or the token was replaced since we read it
                current = await self.verification_repository.find_by_token(value)
                if current is None:
                    raise TokenNotFoundError(token)
                raise TokenAlreadyConsumedError(token)

            user = User(
                id=user_id,
                name=verification.name or (existing.name if existing else ""),
                email=verification.email,
                password_hash=existing.password_hash if existing else None,
                role=verification.role,
                permissions=verification.permissions,
                active=True,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            try:
                saved = await self.user_repository.save(user)
            except PersistenceError as e:
                # Email taken by a writer outside the invitation flow since the check above
                logfire.warn(
                    "Invitation consumed but email already taken",
                    verification_id=str(consumed.id),
                    error=e.reason,
                )
                raise DuplicateUserError(verification.email.root) from e

            logfire.info(
                "Invitation consumed",
                verification_id=str(consumed.id),
                user_id=str(saved.id),
                role=saved.role.value,
                activated_existing=existing is not None,
            )
            return saved

    async def inspect(self, token: str) -> Verification:
        """Get a verification by token with lazy expiry applied.

        Raises:
            TokenNotFoundError: If no verification matches the token
        """
        value = self._parse_token(token)
        verification = await self.verification_repository.find_by_token(value)
        if verification is None:
            raise TokenNotFoundError(token)
        return verification.observed_at(utc_now())

    async def find_for_email(self, email: str) -> list[Verification]:
        """List every verification issued for an email, newest first."""
        address = self._parse_email(email)
        now = utc_now()
        verifications = await self.verification_repository.find_by_email(address)
        return [v.observed_at(now) for v in verifications]

    @staticmethod
    def _parse_email(email: str) -> Email:
        try:
            return Email(email)
        except SchemaValidationError:
            raise ValidationError(f"Invalid email address: {email!r}")

    @staticmethod
    def _parse_role(role: Role | str) -> Role:
        if isinstance(role, Role):
            return role
        try:
            return Role(role.strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}")

    @staticmethod
    def _parse_token(token: str) -> VerificationToken:
        try:
            return VerificationToken(root=token)
        except SchemaValidationError:
            raise TokenNotFoundError(token)
