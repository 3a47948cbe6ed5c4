"""List users use case."""

from pydantic import BaseModel

from teamdesk.application.usecase.base import BaseUseCase
from teamdesk.application.usecase.team.schema import UserItem
from teamdesk.domain.repository import UserRepository
from teamdesk.domain.value import Role


class ListUsersRequest(BaseModel):
    """Request to list workspace users."""

    role: Role | None = None


class ListUsersResponse(BaseModel):
    """Workspace users."""

    users: list[UserItem]
    total: int


class ListUsersUseCase(BaseUseCase):
    """Use case for listing users, optionally by role."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        users = await self.user_repository.list_all()
        if request.role is not None:
            users = [u for u in users if u.role == request.role]
        items = [UserItem.from_user(u) for u in users]
        return ListUsersResponse(users=items, total=len(items))
