"""Verification entity.

A verification is the persisted state of one invitation. It snapshots the
role and permissions that will be granted when the token is consumed.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from teamdesk.domain.model.common import DomainModel, utc_now
from teamdesk.domain.value import (
    Email,
    Permissions,
    Role,
    UserId,
    VerificationId,
    VerificationStatus,
    VerificationToken,
)


class Verification(DomainModel):
    """Verification entity.

    Business rules:
    - At most one pending verification per email; re-issuing replaces the
      token in place
    - Consumed exactly once
    - Expiry is evaluated lazily against ``expires_at``; the stored status
      stays pending
    """

    id: VerificationId
    email: Email
    name: str = ""
    token: VerificationToken
    role: Role
    permissions: Permissions
    status: VerificationStatus = VerificationStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: datetime
    consumed_at: Optional[datetime] = None
    consumed_by_user_id: Optional[UserId] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether a pending verification has passed its expiry."""
        return self.status == VerificationStatus.PENDING and now >= self.expires_at

    def observed_at(self, now: datetime) -> "Verification":
        """Copy with lazy expiry applied to ``status``."""
        if self.is_expired(now):
            return self.model_copy(update={"status": VerificationStatus.EXPIRED})
        return self
