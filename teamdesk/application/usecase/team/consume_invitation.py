"""Consume invitation use case."""

import logfire
from pydantic import BaseModel

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.application.usecase.team.schema import UserItem
from teamdesk.domain.service import InvitationService


class ConsumeInvitationRequest(BaseModel):
    """Request to accept an invitation."""

    token: str


class ConsumeInvitationResponse(BaseModel):
    """Response after accepting an invitation."""

    user: UserItem


class ConsumeInvitationUseCase(BaseUseCase):
    """Use case for accepting an invitation token."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: ConsumeInvitationRequest
    ) -> ConsumeInvitationResponse:
        """Execute consume invitation use case.

        Raises:
            TokenNotFoundError: If the token is unknown
            TokenExpiredError: If the token has expired
            TokenAlreadyConsumedError: If the token was already used
            DuplicateUserError: If an active user already has the email
        """
        with logfire.span("consume_invitation"):
            user = await self.invitation_service.consume(request.token)
            return ConsumeInvitationResponse(user=UserItem.from_user(user))
