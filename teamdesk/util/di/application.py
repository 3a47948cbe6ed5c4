"""Application layer DI providers."""

from dishka import Scope, provide

from teamdesk.application.usecase.admin import (
    FindInvitationsUseCase,
    ListUsersUseCase,
    ResetWorkspaceUseCase,
)
from teamdesk.application.usecase.team import (
    ConsumeInvitationUseCase,
    GetInvitationUseCase,
    InviteMemberUseCase,
)
from teamdesk.domain.repository import UserRepository
from teamdesk.domain.service import InvitationService, MaintenanceService
from teamdesk.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Team use cases
    @provide(scope=Scope.REQUEST)
    def get_invite_member_use_case(
        self, invitation_service: InvitationService
    ) -> InviteMemberUseCase:
        """Provide invite member use case."""
        return InviteMemberUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_consume_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ConsumeInvitationUseCase:
        """Provide consume invitation use case."""
        return ConsumeInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_get_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationUseCase:
        """Provide get invitation use case."""
        return GetInvitationUseCase(invitation_service=invitation_service)

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, user_repository: UserRepository
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_repository=user_repository)

    @provide(scope=Scope.REQUEST)
    def get_find_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> FindInvitationsUseCase:
        """Provide find invitations use case."""
        return FindInvitationsUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_reset_workspace_use_case(
        self, maintenance_service: MaintenanceService
    ) -> ResetWorkspaceUseCase:
        """Provide reset workspace use case."""
        return ResetWorkspaceUseCase(maintenance_service=maintenance_service)
