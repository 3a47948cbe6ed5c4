"""Administrative routes.

Every route requires the X-Admin-Key header to match ADMIN__API_KEY.
The admin API is disabled while no key is configured.
"""

import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, Request, status
import logfire

from teamdesk.application.usecase.admin import (
    FindInvitationsRequest,
    FindInvitationsResponse,
    FindInvitationsUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    ResetWorkspaceRequest,
    ResetWorkspaceResponse,
    ResetWorkspaceUseCase,
)
from teamdesk.config import Settings
from teamdesk.domain.error import ValidationError
from teamdesk.domain.value import Role

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


def _authorize(settings: Settings, admin_key: str | None, request: Request) -> str:
    """Check the admin key and audit the call.

    Returns:
        Caller description for audit logs

    Raises:
        HTTPException: 403 if admin API is disabled, 401 if the key is wrong
    """
    caller = request.client.host if request.client else "unknown"
    expected = settings.admin.api_key

    if not expected:
        logfire.warn("Admin API disabled", path=request.url.path, caller=caller)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin API is disabled",
        )

    if not admin_key or not secrets.compare_digest(admin_key, expected):
        logfire.warn("Admin key rejected", path=request.url.path, caller=caller)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin key",
        )

    logfire.info("Admin call", path=request.url.path, caller=caller)
    return caller


@router.get("/users", response_model=ListUsersResponse)
async def list_users(
    request: Request,
    settings: FromDishka[Settings],
    list_users_use_case: FromDishka[ListUsersUseCase],
    role: Role | None = Query(default=None),
    x_admin_key: str | None = Header(default=None),
) -> ListUsersResponse:
    """List workspace users with role and active flag."""
    _authorize(settings, x_admin_key, request)
    return await list_users_use_case.execute(ListUsersRequest(role=role))


@router.get("/invitations", response_model=FindInvitationsResponse)
async def find_invitations(
    request: Request,
    settings: FromDishka[Settings],
    find_invitations_use_case: FromDishka[FindInvitationsUseCase],
    email: str = Query(...),
    x_admin_key: str | None = Header(default=None),
) -> FindInvitationsResponse:
    """List every invitation issued to an email, newest first.

    Raises:
        HTTPException: 400 if the email is malformed
    """
    _authorize(settings, x_admin_key, request)
    try:
        return await find_invitations_use_case.execute(
            FindInvitationsRequest(email=email)
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/maintenance/reset", response_model=ResetWorkspaceResponse)
async def reset_workspace(
    request: Request,
    settings: FromDishka[Settings],
    reset_workspace_use_case: FromDishka[ResetWorkspaceUseCase],
    x_admin_key: str | None = Header(default=None),
) -> ResetWorkspaceResponse:
    """Delete every non-admin user and all dependent workspace data.

    Irreversible. Collections that fail are listed in ``failures``; the
    others are still cleared.
    """
    caller = _authorize(settings, x_admin_key, request)
    return await reset_workspace_use_case.execute(
        ResetWorkspaceRequest(requested_by=caller)
    )
