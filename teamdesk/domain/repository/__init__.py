"""Repository interfaces for teamdesk domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from teamdesk.domain.repository.collection import CollectionStore
from teamdesk.domain.repository.user import UserRepository
from teamdesk.domain.repository.verification import VerificationRepository

__all__ = [
    "CollectionStore",
    "UserRepository",
    "VerificationRepository",
]
