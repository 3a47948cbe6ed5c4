"""In-memory verification repository for testing."""

from datetime import datetime
from typing import Optional

from teamdesk.domain.model.verification import Verification
from teamdesk.domain.repository.verification import VerificationRepository
from teamdesk.domain.value import Email, UserId, VerificationStatus, VerificationToken

from .store import InMemoryDatabase


class InMemoryVerificationRepository(VerificationRepository):
    """In-memory implementation of VerificationRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find_by_token(self, token: VerificationToken) -> Optional[Verification]:
        """Find a verification by its token."""
        for verification in self._db.verifications:
            if verification.token == token:
                return verification
        return None

    async def find_by_email(self, email: Email) -> list[Verification]:
        """Find every verification for an email, newest first."""
        matches = [v for v in self._db.verifications if v.email == email]
        matches.sort(key=lambda v: v.created_at, reverse=True)
        return matches

    async def upsert_pending(self, verification: Verification) -> Verification:
        """Insert a pending verification or replace the pending one in place."""
        for i, existing in enumerate(self._db.verifications):
            if (
                existing.email == verification.email
                and existing.status == VerificationStatus.PENDING
            ):
                replaced = verification.model_copy(update={"id": existing.id})
                self._db.verifications[i] = replaced
                return replaced

        self._db.verifications.append(verification)
        return verification

    async def mark_consumed(
        self,
        token: VerificationToken,
        consumed_at: datetime,
        consumed_by_user_id: UserId,
    ) -> Optional[Verification]:
        """Transition a pending verification to consumed (check-and-set)."""
        for i, existing in enumerate(self._db.verifications):
            if existing.token == token and existing.status == VerificationStatus.PENDING:
                consumed = existing.model_copy(
                    update={
                        "status": VerificationStatus.CONSUMED,
                        "consumed_at": consumed_at,
                        "consumed_by_user_id": consumed_by_user_id,
                    }
                )
                self._db.verifications[i] = consumed
                return consumed
        return None
