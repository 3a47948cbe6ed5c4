"""Admin use cases."""

from teamdesk.application.usecase.admin.find_invitations import (
    FindInvitationsRequest,
    FindInvitationsResponse,
    FindInvitationsUseCase,
)
from teamdesk.application.usecase.admin.list_users import (
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
)
from teamdesk.application.usecase.admin.reset_workspace import (
    ResetWorkspaceRequest,
    ResetWorkspaceResponse,
    ResetWorkspaceUseCase,
)

__all__ = [
    "FindInvitationsRequest",
    "FindInvitationsResponse",
    "FindInvitationsUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "ResetWorkspaceRequest",
    "ResetWorkspaceResponse",
    "ResetWorkspaceUseCase",
]
