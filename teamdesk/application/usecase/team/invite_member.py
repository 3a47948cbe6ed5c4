"""Invite member use case."""

from typing import Any

import logfire
from pydantic import BaseModel, Field

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.domain.service import InvitationService


class InviteMemberRequest(BaseModel):
    """Request to invite someone to the workspace."""

    name: str = Field(default="", max_length=255)
    email: str
    role: str
    # Validated by the permission model so unknown flags are a 400, not a 422
    permissions: dict[str, Any] | None = None


class InviteMemberResponse(BaseModel):
    """Response after issuing an invitation."""

    token: str
    link: str


class InviteMemberUseCase(BaseUseCase):
    """Use case for issuing (or re-issuing) an invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: InviteMemberRequest) -> InviteMemberResponse:
        """Execute invite member use case.

        Args:
            request: Invite request

        Returns:
            Token and link for the invitation

        Raises:
            ValidationError: If email, role or permissions are invalid
            DuplicateUserError: If an active user already has the email
        """
        with logfire.span("invite_member", role=request.role):
            issued = await self.invitation_service.invite(
                name=request.name,
                email=request.email,
                role=request.role,
                permissions=request.permissions,
            )
            return InviteMemberResponse(token=issued.token, link=issued.link)
