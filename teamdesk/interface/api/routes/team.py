"""Team invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
import logfire

from teamdesk.application.usecase.team import (
    ConsumeInvitationRequest,
    ConsumeInvitationResponse,
    ConsumeInvitationUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationUseCase,
    InviteMemberRequest,
    InviteMemberResponse,
    InviteMemberUseCase,
)
from teamdesk.domain.error import (
    DuplicateUserError,
    TokenAlreadyConsumedError,
    TokenExpiredError,
    TokenNotFoundError,
    ValidationError,
)

router = APIRouter(prefix="/team", tags=["team"], route_class=DishkaRoute)


@router.post(
    "/invite",
    response_model=InviteMemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_member(
    request: InviteMemberRequest,
    invite_member_use_case: FromDishka[InviteMemberUseCase],
) -> InviteMemberResponse:
    """Invite someone to the workspace.

    Re-inviting an email with a pending invitation replaces its token.
    The invitation email is sent in the background; the returned link
    works whether or not it arrives.

    Args:
        request: Invitee name, email, role and permissions
        invite_member_use_case: Invite member use case from DI

    Returns:
        Token and invitation link

    Raises:
        HTTPException: 400 on invalid input, 409 if the user already exists
    """
    try:
        return await invite_member_use_case.execute(request)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/invite/consume", response_model=ConsumeInvitationResponse)
async def consume_invitation(
    request: ConsumeInvitationRequest,
    consume_invitation_use_case: FromDishka[ConsumeInvitationUseCase],
) -> ConsumeInvitationResponse:
    """Accept an invitation.

    Args:
        request: Invitation token
        consume_invitation_use_case: Consume invitation use case from DI

    Returns:
        The activated user

    Raises:
        HTTPException: 404 unknown token, 410 expired, 409 already used
    """
    try:
        return await consume_invitation_use_case.execute(request)
    except TokenNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TokenExpiredError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except (TokenAlreadyConsumedError, DuplicateUserError) as e:
        logfire.info("Consume rejected", reason=type(e).__name__)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/invite/{token}", response_model=GetInvitationResponse)
async def get_invitation(
    token: str,
    get_invitation_use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Show an invitation before accepting it.

    Raises:
        HTTPException: 404 if the token is unknown
    """
    try:
        return await get_invitation_use_case.execute(GetInvitationRequest(token=token))
    except TokenNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
