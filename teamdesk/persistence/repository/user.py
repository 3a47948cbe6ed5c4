"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.model import User
from teamdesk.domain.repository import UserRepository
from teamdesk.domain.value import Email, Role, UserId
from teamdesk.persistence.mappers import row_to_user, user_to_dict
from teamdesk.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Normalized email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def list_all(self) -> list[User]:
        """List every user, oldest first."""
        stmt = select(users_table).order_by(users_table.c.created_at)
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user

        Raises:
            PersistenceError: If another user already owns the email
        """
        existing = await self.find_by_id(user.id)
        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise PersistenceError("users", f"email already in use: {user.email}") from e
        return user

    async def delete_except_role(self, role: Role) -> int:
        """Delete every user whose role differs from ``role``.

        Args:
            role: Role to keep

        Returns:
            Number of deleted users

        Raises:
            PersistenceError: If the delete fails; the surrounding
                transaction stays usable
        """
        stmt = delete(users_table).where(users_table.c.role != role.value)
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError("users", str(getattr(e, "orig", None) or e)) from e
        return result.rowcount or 0
