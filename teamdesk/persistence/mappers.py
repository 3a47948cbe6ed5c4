"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's ORM. Rows are re-validated on the way in.
"""

from typing import Any, Dict
from uuid import UUID

from teamdesk.domain.model import User, Verification
from teamdesk.domain.value import (
    Email,
    Permissions,
    Role,
    UserId,
    VerificationId,
    VerificationStatus,
    VerificationToken,
)

PERMISSION_FLAGS = ("billing", "projects", "timeline", "management")


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_permissions(row: Dict[str, Any]) -> Permissions:
    """Read the permission_* columns of a row."""
    return Permissions(
        **{flag: bool(row.get(f"permission_{flag}", False)) for flag in PERMISSION_FLAGS}
    )


def permissions_to_dict(permissions: Permissions) -> Dict[str, Any]:
    """Flatten permissions into permission_* columns."""
    return {f"permission_{flag}": getattr(permissions, flag) for flag in PERMISSION_FLAGS}


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row.get("name") or "",
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        role=Role(row["role"]),
        permissions=row_to_permissions(row),
        active=row.get("active", False),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email.root,
        "password_hash": user.password_hash,
        "role": user.role.value,
        **permissions_to_dict(user.permissions),
        "active": user.active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_verification(row: Dict[str, Any]) -> Verification:
    """Convert database row to Verification domain model.

    Args:
        row: Database row as dict

    Returns:
        Verification domain model
    """
    return Verification(
        id=VerificationId(_uuid(row["id"])),
        email=Email(row["email"]),
        name=row.get("name") or "",
        token=VerificationToken(root=row["token"]),
        role=Role(row["role"]),
        permissions=row_to_permissions(row),
        status=VerificationStatus(row["status"]),
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        consumed_at=row.get("consumed_at"),
        consumed_by_user_id=UserId(_uuid(row["consumed_by_user_id"]))
        if row.get("consumed_by_user_id")
        else None,
    )


def verification_to_dict(verification: Verification) -> Dict[str, Any]:
    """Convert Verification domain model to database dict.

    Args:
        verification: Verification domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": verification.id,
        "email": verification.email.root,
        "name": verification.name,
        "token": verification.token.root,
        "role": verification.role.value,
        **permissions_to_dict(verification.permissions),
        "status": verification.status.value,
        "created_at": verification.created_at,
        "expires_at": verification.expires_at,
        "consumed_at": verification.consumed_at,
        "consumed_by_user_id": verification.consumed_by_user_id,
    }
