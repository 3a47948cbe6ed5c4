"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from teamdesk.domain.model.user import User
from teamdesk.domain.value import Email, Role, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer and must enforce a
    unique email per user.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their (normalized) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List every user, oldest first."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            PersistenceError: If another user already owns the email
        """
        pass

    @abstractmethod
    async def delete_except_role(self, role: Role) -> int:
        """Delete every user whose role differs from ``role``.

        Args:
            role: The role to keep

        Returns:
            Number of deleted users
        """
        pass
