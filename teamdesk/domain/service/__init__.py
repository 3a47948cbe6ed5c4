"""Domain services."""

from .base import Service
from .email_dispatcher import (
    DeliveryOutcome,
    EmailDispatcher,
    EmailMessage,
    EmailTransport,
)
from .invitation_service import InvitationService, IssuedInvitation
from .maintenance_service import DEPENDENT_COLLECTIONS, MaintenanceService, ResetReport
from .permission_service import PermissionService

__all__ = [
    "DEPENDENT_COLLECTIONS",
    "DeliveryOutcome",
    "EmailDispatcher",
    "EmailMessage",
    "EmailTransport",
    "InvitationService",
    "IssuedInvitation",
    "MaintenanceService",
    "PermissionService",
    "ResetReport",
    "Service",
]
