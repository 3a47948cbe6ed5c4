"""Domain value objects for teamdesk."""

from teamdesk.domain.value.identifiers import UserId, VerificationId
from teamdesk.domain.value.types import (
    Email,
    Permissions,
    Role,
    VerificationStatus,
    VerificationToken,
)

__all__ = [
    # Identifiers
    "UserId",
    "VerificationId",
    # Types
    "Email",
    "Permissions",
    "Role",
    "VerificationStatus",
    "VerificationToken",
]
