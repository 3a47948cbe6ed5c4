"""SQLAlchemy table definitions for teamdesk.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()


def _permission_columns() -> list[Column]:
    return [
        Column("permission_billing", Boolean, nullable=False, server_default="false"),
        Column("permission_projects", Boolean, nullable=False, server_default="false"),
        Column("permission_timeline", Boolean, nullable=False, server_default="false"),
        Column(
            "permission_management", Boolean, nullable=False, server_default="false"
        ),
    ]


user_role = Enum("ADMIN", "TEAM", "CLIENT", name="user_role", create_type=False)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False, server_default=""),
    Column("email", String(255), nullable=False, unique=True),  # Stored lower case
    Column("password_hash", Text, nullable=True),
    Column("role", user_role, nullable=False, server_default="TEAM"),
    *_permission_columns(),
    Column("active", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_role", users_table.c.role)

# ============================================================================
# VERIFICATIONS TABLE
# ============================================================================
verifications_table = Table(
    "verifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False),
    Column("name", String(255), nullable=False, server_default=""),
    Column("token", String(255), nullable=False, unique=True),
    Column("role", user_role, nullable=False),
    *_permission_columns(),
    Column(
        "status",
        Enum("pending", "consumed", name="verification_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("consumed_at", TIMESTAMP(timezone=True), nullable=True),
    # No foreign key: the user row is written after the status transition
    Column("consumed_by_user_id", UUID, nullable=True),
)

Index("idx_verifications_email", verifications_table.c.email)

# Only one pending verification per email; target of the invite upsert
Index(
    "idx_verifications_unique_pending_email",
    verifications_table.c.email,
    unique=True,
    postgresql_where=verifications_table.c.status == "pending",
)

# ============================================================================
# DEPENDENT COLLECTIONS
# Workspace data cleared by the maintenance reset. References between them
# are plain ids without foreign keys.
# ============================================================================
clients_table = Table(
    "clients",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("company", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

projects_table = Table(
    "projects",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("client_email", String(255), nullable=True),
    Column("budget", Numeric(12, 2), nullable=True),
    Column("currency", String(3), nullable=True),
    Column("start_date", Date, nullable=True),
    Column("end_date", Date, nullable=True),
)

tasks_table = Table(
    "tasks",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("project_id", UUID, nullable=True),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=True),
    Column("status", String(50), nullable=False, server_default="todo"),
    Column("assignee_id", UUID, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

invoices_table = Table(
    "invoices",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("project_id", UUID, nullable=True),
    Column("client_email", String(255), nullable=True),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False, server_default="USD"),
    Column("status", String(50), nullable=False, server_default="draft"),
    Column("issued_at", TIMESTAMP(timezone=True), nullable=True),
)

conversations_table = Table(
    "conversations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("conversation_id", UUID, nullable=False),
    Column("sender_id", UUID, nullable=True),
    Column("text", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

docs_table = Table(
    "docs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

activities_table = Table(
    "activities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("actor_id", UUID, nullable=True),
    Column("action", String(100), nullable=False),
    Column("target", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Collection name -> table, for bulk maintenance operations
COLLECTION_TABLES: dict[str, Table] = {
    "clients": clients_table,
    "projects": projects_table,
    "tasks": tasks_table,
    "invoices": invoices_table,
    "verifications": verifications_table,
    "conversations": conversations_table,
    "messages": messages_table,
    "docs": docs_table,
    "activities": activities_table,
}
