"""Domain model entities for teamdesk."""

from teamdesk.domain.model.user import User
from teamdesk.domain.model.verification import Verification

__all__ = [
    "User",
    "Verification",
]
