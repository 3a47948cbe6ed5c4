"""Reset workspace use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.domain.service import MaintenanceService


class ResetWorkspaceRequest(BaseModel):
    """Request to wipe all non-admin data."""

    # Who asked for the reset, for the audit log
    requested_by: str = "unknown"


class ResetWorkspaceResponse(BaseModel):
    """Outcome of a workspace reset."""

    ok: bool
    users_deleted: int
    deleted: dict[str, int]
    failures: dict[str, str]
    started_at: datetime
    finished_at: datetime | None


class ResetWorkspaceUseCase(BaseUseCase):
    """Use case for the admin-preserving workspace reset."""

    def __init__(self, maintenance_service: MaintenanceService) -> None:
        """Initialize use case.

        Args:
            maintenance_service: Maintenance domain service
        """
        self.maintenance_service = maintenance_service

    async def execute(self, request: ResetWorkspaceRequest) -> ResetWorkspaceResponse:
        """Execute reset workspace use case.

        Args:
            request: Reset request

        Returns:
            Per-collection deletion counts and failures
        """
        with logfire.span("reset_workspace", requested_by=request.requested_by):
            logfire.warn("Workspace reset requested", requested_by=request.requested_by)
            report = await self.maintenance_service.reset()
            return ResetWorkspaceResponse(
                ok=report.ok,
                users_deleted=report.users_deleted,
                deleted=report.deleted,
                failures=report.failures,
                started_at=report.started_at,
                finished_at=report.finished_at,
            )
