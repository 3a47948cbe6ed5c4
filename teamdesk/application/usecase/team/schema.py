"""Response items shared by team and admin use cases."""

from datetime import datetime

from pydantic import BaseModel

from teamdesk.domain.model import User, Verification
from teamdesk.domain.value import Permissions, Role, VerificationStatus


class UserItem(BaseModel):
    """User in responses. Never carries the password hash."""

    id: str
    name: str
    email: str
    role: Role
    permissions: Permissions
    active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserItem":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email.root,
            role=user.role,
            permissions=user.effective_permissions,
            active=user.active,
            created_at=user.created_at,
        )


class InvitationItem(BaseModel):
    """Verification in responses. The token itself is not included."""

    id: str
    email: str
    name: str
    role: Role
    permissions: Permissions
    status: VerificationStatus
    created_at: datetime
    expires_at: datetime
    consumed_at: datetime | None = None

    @classmethod
    def from_verification(cls, verification: Verification) -> "InvitationItem":
        return cls(
            id=str(verification.id),
            email=verification.email.root,
            name=verification.name,
            role=verification.role,
            permissions=verification.permissions,
            status=verification.status,
            created_at=verification.created_at,
            expires_at=verification.expires_at,
            consumed_at=verification.consumed_at,
        )
