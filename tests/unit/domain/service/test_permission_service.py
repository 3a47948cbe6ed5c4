"""Unit tests for PermissionService."""

import pytest

from teamdesk.domain.error import ValidationError
from teamdesk.domain.service import PermissionService
from teamdesk.domain.value import Permissions, Role


@pytest.fixture
def service() -> PermissionService:
    return PermissionService()


class TestAdmin:
    def test_admin_gets_every_flag(self, service):
        """ADMIN ignores the requested flags."""
        result = service.validate(Role.ADMIN, {"billing": False})

        assert result == Permissions.all_granted()

    def test_admin_ignores_invalid_flags(self, service):
        result = service.validate(Role.ADMIN, {"unknown": True})

        assert result == Permissions.all_granted()


class TestTeam:
    def test_team_accepts_any_subset(self, service):
        result = service.validate(Role.TEAM, {"timeline": True, "management": True})

        assert result == Permissions(timeline=True, management=True)

    def test_team_unspecified_flags_default_false(self, service):
        result = service.validate(Role.TEAM, {"billing": True})

        assert result.granted() == {"billing"}

    def test_none_means_no_flags(self, service):
        assert service.validate(Role.TEAM, None) == Permissions()


class TestClient:
    def test_client_may_hold_billing_and_projects(self, service):
        result = service.validate(Role.CLIENT, {"billing": True, "projects": True})

        assert result == Permissions(billing=True, projects=True)

    @pytest.mark.parametrize("flag", ["timeline", "management"])
    def test_client_forbidden_flag_rejected(self, service, flag):
        with pytest.raises(ValidationError, match="permission not allowed for role"):
            service.validate(Role.CLIENT, {flag: True})

    def test_client_forbidden_flag_false_is_fine(self, service):
        result = service.validate(Role.CLIENT, {"timeline": False, "billing": True})

        assert result == Permissions(billing=True)


def test_unknown_flag_is_validation_error(service):
    with pytest.raises(ValidationError):
        service.validate(Role.TEAM, {"admin": True})


def test_validate_is_deterministic(service):
    first = service.validate(Role.CLIENT, Permissions(projects=True))
    second = service.validate(Role.CLIENT, Permissions(projects=True))

    assert first == second
