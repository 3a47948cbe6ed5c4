"""PostgreSQL implementation of Verification repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from teamdesk.domain.model import Verification
from teamdesk.domain.repository import VerificationRepository
from teamdesk.domain.value import Email, UserId, VerificationStatus, VerificationToken
from teamdesk.persistence.mappers import row_to_verification, verification_to_dict
from teamdesk.persistence.tables import verifications_table

# Columns never overwritten when a pending record is re-issued
_UPSERT_KEEP = frozenset({"id", "email"})


class PostgresVerificationRepository(VerificationRepository):
    """PostgreSQL implementation of VerificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_token(self, token: VerificationToken) -> Optional[Verification]:
        """Find a verification by its token.

        Args:
            token: Token to look up

        Returns:
            Verification if found, None otherwise
        """
        stmt = select(verifications_table).where(
            verifications_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_verification(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> list[Verification]:
        """Find every verification for an email, newest first."""
        stmt = (
            select(verifications_table)
            .where(verifications_table.c.email == email.root)
            .order_by(verifications_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_verification(dict(row)) for row in result.mappings().all()]

    async def upsert_pending(self, verification: Verification) -> Verification:
        """Insert a pending verification or replace the pending one in place.

        Single INSERT ... ON CONFLICT against the partial unique index on
        (email) WHERE status = 'pending', so concurrent invites for the same
        email serialize in the database.

        Args:
            verification: Pending verification to store

        Returns:
            Stored verification (keeps the existing id on replacement)
        """
        values = verification_to_dict(verification)
        stmt = insert(verifications_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[verifications_table.c.email],
            index_where=verifications_table.c.status
            == VerificationStatus.PENDING.value,
            set_={
                key: stmt.excluded[key] for key in values if key not in _UPSERT_KEEP
            },
        ).returning(verifications_table)

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_verification(dict(row))

    async def mark_consumed(
        self,
        token: VerificationToken,
        consumed_at: datetime,
        consumed_by_user_id: UserId,
    ) -> Optional[Verification]:
        """Conditionally transition a pending verification to consumed.

        The WHERE clause re-checks the status under the row lock, so a
        concurrent second update matches zero rows.

        Returns:
            The consumed verification, or None if it was not pending
        """
        stmt = (
            update(verifications_table)
            .where(
                and_(
                    verifications_table.c.token == token.root,
                    verifications_table.c.status == VerificationStatus.PENDING.value,
                )
            )
            .values(
                status=VerificationStatus.CONSUMED.value,
                consumed_at=consumed_at,
                consumed_by_user_id=consumed_by_user_id,
            )
            .returning(verifications_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_verification(dict(row)) if row else None
