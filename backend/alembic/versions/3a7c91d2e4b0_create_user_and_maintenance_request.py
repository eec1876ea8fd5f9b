"""Create user and maintenance_request tables.

Revision ID: 3a7c91d2e4b0
Revises:
Create Date: 2025-11-27

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3a7c91d2e4b0"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ENUMS = {
    "user_role_enum": ("tenant", "manager", "admin"),
    "request_status_enum": (
        "in_queue",
        "viewed",
        "maintenance_requested",
        "implementing_actions",
        "completed",
    ),
    "priority_enum": ("low", "normal", "high", "emergency"),
    "preferred_time_window_enum": ("morning", "afternoon", "evening", "anytime"),
    "updated_by_role_enum": ("tenant", "manager", "system"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*_ENUMS[name], name=name, create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create enum types via raw DDL, then reference them with
    # create_type=False so create_table doesn't issue a second CREATE TYPE.
    for name, values in _ENUMS.items():
        quoted = ", ".join(f"'{value}'" for value in values)
        op.execute(f"CREATE TYPE {name} AS ENUM ({quoted})")

    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("role", _enum("user_role_enum"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_user"),
        sa.UniqueConstraint("email", name="uq_user_email"),
    )

    op.create_table(
        "maintenance_request",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column(
            "status",
            _enum("request_status_enum"),
            server_default="in_queue",
            nullable=False,
        ),
        sa.Column(
            "priority",
            _enum("priority_enum"),
            server_default="normal",
            nullable=False,
        ),
        sa.Column(
            "preferred_time_window", _enum("preferred_time_window_enum"), nullable=True
        ),
        sa.Column("access_instructions", sa.Text(), nullable=True),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column(
            "last_updated_by_role",
            _enum("updated_by_role_enum"),
            server_default="system",
            nullable=False,
        ),
        sa.Column("in_queue_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("viewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "maintenance_requested_at", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column("implementing_actions_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["user.id"],
            name="fk_maintenance_request_tenant_id_user",
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_maintenance_request"),
    )
    op.create_index(
        "idx_maintenance_request_tenant", "maintenance_request", ["tenant_id"]
    )
    op.create_index(
        "idx_maintenance_request_status", "maintenance_request", ["status"]
    )
    op.create_index(
        "idx_maintenance_request_created_at", "maintenance_request", ["created_at"]
    )


def downgrade() -> None:
    op.drop_index(
        "idx_maintenance_request_created_at", table_name="maintenance_request"
    )
    op.drop_index("idx_maintenance_request_status", table_name="maintenance_request")
    op.drop_index("idx_maintenance_request_tenant", table_name="maintenance_request")
    op.drop_table("maintenance_request")
    op.drop_table("user")

    for name in reversed(list(_ENUMS)):
        sa.Enum(name=name).drop(op.get_bind(), checkfirst=True)
