"""Permission model: validation of role/permission combinations."""

from typing import Any, Mapping

from pydantic import ValidationError as SchemaValidationError

from teamdesk.domain.error import ValidationError
from teamdesk.domain.value import Permissions, Role

from .base import Service

# Flags a CLIENT may hold; everything else must stay false
CLIENT_ALLOWED_FLAGS = frozenset({"billing", "projects"})


class PermissionService(Service):
    """Pure validation of role/permission grants. No I/O."""

    def validate(
        self,
        role: Role,
        permissions: Permissions | Mapping[str, Any] | None = None,
    ) -> Permissions:
        """Normalize the permissions granted alongside a role.

        - ADMIN: the argument is ignored, every flag is granted
        - TEAM: any subset, unspecified flags default to false
        - CLIENT: only billing and projects may be granted

        Args:
            role: Role being granted
            permissions: Requested flags (model or mapping); None means none

        Returns:
            Normalized permissions

        Raises:
            ValidationError: If a flag is unknown or not allowed for the role
        """
        if role == Role.ADMIN:
            return Permissions.all_granted()

        requested = self._coerce(permissions)

        if role == Role.CLIENT:
            forbidden = requested.granted() - CLIENT_ALLOWED_FLAGS
            if forbidden:
                raise ValidationError("permission not allowed for role")

        return requested

    @staticmethod
    def _coerce(permissions: Permissions | Mapping[str, Any] | None) -> Permissions:
        if permissions is None:
            return Permissions()
        if isinstance(permissions, Permissions):
            return permissions
        try:
            return Permissions.model_validate(dict(permissions))
        except SchemaValidationError as e:
            raise ValidationError(f"Invalid permissions: {e.errors()[0]['msg']}")
