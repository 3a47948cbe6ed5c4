"""In-memory user repository for testing."""

from typing import Optional

from teamdesk.domain.error import PersistenceError
from teamdesk.domain.model.user import User
from teamdesk.domain.repository.user import UserRepository
from teamdesk.domain.value import Email, Role, UserId

from .store import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._db = database or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._db.users.get(user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email."""
        for user in self._db.users.values():
            if user.email == email:
                return user
        return None

    async def list_all(self) -> list[User]:
        """List every user, oldest first."""
        return sorted(self._db.users.values(), key=lambda u: u.created_at)

    async def save(self, user: User) -> User:
        """Save or update a user.

        Raises:
            PersistenceError: If another user already owns the email
        """
        for other in self._db.users.values():
            if other.email == user.email and other.id != user.id:
                raise PersistenceError("users", f"email already in use: {user.email}")
        self._db.users[user.id] = user
        return user

    async def delete_except_role(self, role: Role) -> int:
        """Delete every user whose role differs from ``role``."""
        doomed = [uid for uid, user in self._db.users.items() if user.role != role]
        for uid in doomed:
            del self._db.users[uid]
        return len(doomed)
