"""Get invitation use case."""

from pydantic import BaseModel

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.application.usecase.team.schema import InvitationItem
from teamdesk.domain.service import InvitationService


class GetInvitationRequest(BaseModel):
    """Request to look up an invitation by token."""

    token: str


class GetInvitationResponse(InvitationItem):
    """Invitation as seen by the invitee before accepting."""

    pass


class GetInvitationUseCase(BaseUseCase):
    """Use case for showing an invitation before it is accepted."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        """Look up the invitation, reporting lazy expiry in its status.

        Raises:
            TokenNotFoundError: If the token is unknown
        """
        verification = await self.invitation_service.inspect(request.token)
        return GetInvitationResponse.from_verification(verification)
