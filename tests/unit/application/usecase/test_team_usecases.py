"""Tests for team invitation use cases."""

from datetime import timedelta

import pytest

from teamdesk.application.usecase.team import (
    ConsumeInvitationRequest,
    ConsumeInvitationUseCase,
    GetInvitationRequest,
    GetInvitationUseCase,
    InviteMemberRequest,
    InviteMemberUseCase,
)
from teamdesk.domain.error import TokenNotFoundError, ValidationError
from teamdesk.domain.repository import VerificationRepository
from teamdesk.domain.value import Role, VerificationStatus
from tests.factories import make_verification
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestInviteMemberUseCase:
    @pytest.mark.asyncio
    async def test_returns_token_and_link(self, unit_env):
        use_case = await unit_env.get(InviteMemberUseCase)

        response = await use_case.execute(
            InviteMemberRequest(
                name="Test Setup User",
                email="test_invite_user@example.com",
                role="TEAM",
                permissions={"billing": True, "projects": True, "timeline": True},
            )
        )

        assert response.token
        assert response.link.endswith(response.token)

    @pytest.mark.asyncio
    async def test_unknown_permission_flag(self, unit_env):
        use_case = await unit_env.get(InviteMemberUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                InviteMemberRequest(
                    email="a@example.com", role="TEAM", permissions={"root": True}
                )
            )


class TestConsumeInvitationUseCase:
    @pytest.mark.asyncio
    async def test_response_hides_password_hash(self, unit_env):
        invite = await unit_env.get(InviteMemberUseCase)
        consume = await unit_env.get(ConsumeInvitationUseCase)
        issued = await invite.execute(
            InviteMemberRequest(name="Ann", email="ann@example.com", role="CLIENT")
        )

        response = await consume.execute(ConsumeInvitationRequest(token=issued.token))

        assert response.user.email == "ann@example.com"
        assert response.user.role == Role.CLIENT
        assert response.user.active is True
        assert "password_hash" not in response.model_dump()["user"]


class TestGetInvitationUseCase:
    @pytest.mark.asyncio
    async def test_pending(self, unit_env):
        invite = await unit_env.get(InviteMemberUseCase)
        get = await unit_env.get(GetInvitationUseCase)
        issued = await invite.execute(
            InviteMemberRequest(name="Ann", email="ann@example.com", role="TEAM")
        )

        response = await get.execute(GetInvitationRequest(token=issued.token))

        assert response.email == "ann@example.com"
        assert response.name == "Ann"
        assert response.status == VerificationStatus.PENDING

    @pytest.mark.asyncio
    async def test_expired(self, unit_env):
        repo = await unit_env.get(VerificationRepository)
        await repo.upsert_pending(
            make_verification("a@example.com", token="t1", expires_in=timedelta(days=-1))
        )
        get = await unit_env.get(GetInvitationUseCase)

        response = await get.execute(GetInvitationRequest(token="t1"))

        assert response.status == VerificationStatus.EXPIRED

    @pytest.mark.asyncio
    async def test_unknown(self, unit_env):
        get = await unit_env.get(GetInvitationUseCase)

        with pytest.raises(TokenNotFoundError):
            await get.execute(GetInvitationRequest(token="nope"))
