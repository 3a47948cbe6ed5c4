"""Find invitations use case."""

from pydantic import BaseModel

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.application.usecase.team.schema import InvitationItem
from teamdesk.domain.service import InvitationService


class FindInvitationsRequest(BaseModel):
    """Request to list the invitations sent to an email."""

    email: str


class FindInvitationsResponse(BaseModel):
    """Invitations for one email, newest first."""

    invitations: list[InvitationItem]


class FindInvitationsUseCase(BaseUseCase):
    """Use case for auditing the invitations issued to an email."""

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: FindInvitationsRequest) -> FindInvitationsResponse:
        """Execute find invitations use case.

        Raises:
            ValidationError: If the email is malformed
        """
        verifications = await self.invitation_service.find_for_email(request.email)
        return FindInvitationsResponse(
            invitations=[InvitationItem.from_verification(v) for v in verifications]
        )
