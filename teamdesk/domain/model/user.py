"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from teamdesk.domain.model.common import DomainModel, utc_now
from teamdesk.domain.value import Email, Permissions, Role, UserId


class User(DomainModel):
    """Workspace member.

    An inactive user is a provisional account that has not completed its
    invitation yet. ADMIN users hold every permission flag whatever is
    stored in ``permissions``.
    """

    id: UserId
    name: str = ""
    email: Email
    password_hash: Optional[str] = None
    role: Role = Role.TEAM
    permissions: Permissions = Field(default_factory=Permissions)
    active: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def effective_permissions(self) -> Permissions:
        """Permissions after applying the ADMIN override."""
        if self.is_admin:
            return Permissions.all_granted()
        return self.permissions
