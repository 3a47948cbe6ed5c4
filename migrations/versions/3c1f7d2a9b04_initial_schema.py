"""initial_schema

Create the foundational schema for teamdesk:
- Users (role, permission flags, active flag)
- Verifications (invitation tokens, one pending row per email)
- Workspace collections cleared by the maintenance reset

Revision ID: 3c1f7d2a9b04
Revises:
Create Date: 2026-10-12 09:14:02.318544

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7d2a9b04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("uuid_generate_v4()"),
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        postgresql.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _permission_columns() -> list[sa.Column]:
    return [
        sa.Column(f"permission_{flag}", sa.Boolean, nullable=False, server_default="false")
        for flag in ("billing", "projects", "timeline", "management")
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('ADMIN', 'TEAM', 'CLIENT');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE verification_status AS ENUM ('pending', 'consumed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    user_role = postgresql.ENUM(name="user_role", create_type=False)
    verification_status = postgresql.ENUM(name="verification_status", create_type=False)

    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text, nullable=True),
        sa.Column("role", user_role, nullable=False, server_default="TEAM"),
        *_permission_columns(),
        sa.Column("active", sa.Boolean, nullable=False, server_default="false"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("idx_users_role", "users", ["role"])

    # ========================================================================
    # VERIFICATIONS
    # ========================================================================
    op.create_table(
        "verifications",
        _uuid_pk(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("token", sa.String(255), nullable=False, unique=True),
        sa.Column("role", user_role, nullable=False),
        *_permission_columns(),
        sa.Column(
            "status", verification_status, nullable=False, server_default="pending"
        ),
        _timestamp("created_at"),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("consumed_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("consumed_by_user_id", postgresql.UUID(as_uuid=True), nullable=True),
    )
    op.create_index("idx_verifications_email", "verifications", ["email"])
    # At most one pending verification per email (upsert conflict target)
    op.create_index(
        "idx_verifications_unique_pending_email",
        "verifications",
        ["email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # ========================================================================
    # WORKSPACE COLLECTIONS
    # ========================================================================
    op.create_table(
        "clients",
        _uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("company", sa.String(255), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "projects",
        _uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("client_email", sa.String(255), nullable=True),
        sa.Column("budget", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.String(3), nullable=True),
        sa.Column("start_date", sa.Date, nullable=True),
        sa.Column("end_date", sa.Date, nullable=True),
    )

    op.create_table(
        "tasks",
        _uuid_pk(),
        sa.Column("project_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="todo"),
        sa.Column("assignee_id", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "invoices",
        _uuid_pk(),
        sa.Column("project_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("client_email", sa.String(255), nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("status", sa.String(50), nullable=False, server_default="draft"),
        sa.Column("issued_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
    )

    op.create_table(
        "conversations",
        _uuid_pk(),
        sa.Column("title", sa.String(255), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "messages",
        _uuid_pk(),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("text", sa.Text, nullable=False),
        _timestamp("created_at"),
    )

    op.create_table(
        "docs",
        _uuid_pk(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text, nullable=True),
        _timestamp("updated_at"),
    )

    op.create_table(
        "activities",
        _uuid_pk(),
        sa.Column("actor_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("target", sa.String(255), nullable=True),
        _timestamp("created_at"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "activities",
        "docs",
        "messages",
        "conversations",
        "invoices",
        "tasks",
        "projects",
        "clients",
        "verifications",
        "users",
    ):
        op.drop_table(table)

    op.execute("DROP TYPE IF EXISTS verification_status")
    op.execute("DROP TYPE IF EXISTS user_role")
