"""Team use cases."""

from teamdesk.application.usecase.team.consume_invitation import (
    ConsumeInvitationRequest,
    ConsumeInvitationResponse,
    ConsumeInvitationUseCase,
)
from teamdesk.application.usecase.team.get_invitation import (
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
)
from teamdesk.application.usecase.team.invite_member import (
    InviteMemberRequest,
    InviteMemberResponse,
    InviteMemberUseCase,
)
from teamdesk.application.usecase.team.schema import InvitationItem, UserItem

__all__ = [
    "ConsumeInvitationRequest",
    "ConsumeInvitationResponse",
    "ConsumeInvitationUseCase",
    "GetInvitationRequest",
    "GetInvitationResponse",
    "GetInvitationUseCase",
    "InvitationItem",
    "InviteMemberRequest",
    "InviteMemberResponse",
    "InviteMemberUseCase",
    "UserItem",
]
