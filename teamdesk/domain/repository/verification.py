"""Verification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from teamdesk.domain.model.verification import Verification
from teamdesk.domain.value import Email, UserId, VerificationToken


class VerificationRepository(ABC):
    """Repository for Verification entity.

    Both write operations must be atomic in the store itself; callers never
    check-then-write.
    """

    @abstractmethod
    async def find_by_token(self, token: VerificationToken) -> Optional[Verification]:
        """Find a verification by token.

        Args:
            token: The invitation token

        Returns:
            The verification if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> list[Verification]:
        """Find every verification issued for an email, newest first."""
        pass

    @abstractmethod
    async def upsert_pending(self, verification: Verification) -> Verification:
        """Insert a pending verification, or replace the existing one.

        When a pending verification already exists for the email, its
        token, grant and timestamps are overwritten in place and its id is
        kept. Never leaves two pending records for one email.

        Args:
            verification: Pending verification to store

        Returns:
            The stored verification
        """
        pass

    @abstractmethod
    async def mark_consumed(
        self,
        token: VerificationToken,
        consumed_at: datetime,
        consumed_by_user_id: UserId,
    ) -> Optional[Verification]:
        """Transition a pending verification to consumed.

        Single conditional update: succeeds only if the stored status is
        still pending.

        Returns:
            The consumed verification, or None if no pending record matched
        """
        pass
