"""Initial schema - users, roles, permissions, link tables, holidays, activity log.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_by", sa.String(255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_by", sa.String(255), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _audit_checks(table: str) -> list[sa.CheckConstraint]:
    return [
        sa.CheckConstraint("created_at <= updated_at", name=f"ck_{table}_created_before_updated"),
        sa.CheckConstraint(
            "(deleted_at IS NULL) = (deleted_by IS NULL)",
            name=f"ck_{table}_deleted_stamp_pair",
        ),
    ]


def _link_stamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        *_audit_columns(),
        *_audit_checks("roles"),
    )
    op.create_index("ux_roles_name", "roles", ["name"], unique=True)

    op.create_table(
        "permissions",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("resource", sa.String(100), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        *_audit_columns(),
        *_audit_checks("permissions"),
    )
    op.create_index("ux_permissions_name", "permissions", ["name"], unique=True)
    op.create_index(
        "ux_permissions_resource_action", "permissions", ["resource", "action"], unique=True
    )

    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("email_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_changed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("password_changed_by", sa.String(255), nullable=True),
        *_audit_columns(),
        *_audit_checks("users"),
        sa.CheckConstraint("char_length(username) >= 3", name="ck_users_username_length"),
    )
    op.create_index("ux_users_username", "users", ["username"], unique=True)
    op.create_index("ux_users_email", "users", ["email"], unique=True)

    op.create_table(
        "holidays",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_audit_columns(),
        *_audit_checks("holidays"),
    )
    op.create_index("ix_holidays_date", "holidays", ["date"])

    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.BigInteger(), sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "permission_id",
            sa.BigInteger(),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        *_link_stamp_columns(),
        sa.PrimaryKeyConstraint("role_id", "permission_id", name="pk_role_permissions"),
    )
    op.create_index("ix_role_permissions_permission_id", "role_permissions", ["permission_id"])

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.BigInteger(), sa.ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
        *_link_stamp_columns(),
        sa.PrimaryKeyConstraint("user_id", "role_id", name="pk_user_roles"),
    )
    op.create_index("ix_user_roles_role_id", "user_roles", ["role_id"])

    op.create_table(
        "user_permissions",
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "permission_id",
            sa.BigInteger(),
            sa.ForeignKey("permissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("is_allowed", sa.Boolean(), nullable=False),
        *_link_stamp_columns(),
        sa.PrimaryKeyConstraint("user_id", "permission_id", name="pk_user_permissions"),
    )

    op.create_table(
        "activitylogs",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("entity", sa.String(100), nullable=False),
        sa.Column("details", postgresql.JSONB(), nullable=True),
        sa.Column("employee_id", sa.BigInteger(), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("request_info", postgresql.JSONB(), nullable=False),
    )
    op.create_index("ix_activitylogs_entity_occurred_at", "activitylogs", ["entity", "occurred_at"])
    op.create_index("ix_activitylogs_action_occurred_at", "activitylogs", ["action", "occurred_at"])
    op.create_index("ix_activitylogs_occurred_at", "activitylogs", ["occurred_at"])

    # Append-only: reject UPDATE and DELETE on the audit trail.
    op.execute(
        """
        CREATE FUNCTION activitylogs_append_only() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'activitylogs is append-only';
        END;
        $$ LANGUAGE plpgsql
        """
    )
    op.execute(
        """
        CREATE TRIGGER activitylogs_no_update_delete
        BEFORE UPDATE OR DELETE ON activitylogs
        FOR EACH ROW EXECUTE FUNCTION activitylogs_append_only()
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS activitylogs_no_update_delete ON activitylogs")
    op.execute("DROP FUNCTION IF EXISTS activitylogs_append_only()")
    op.drop_table("activitylogs")
    op.drop_table("user_permissions")
    op.drop_table("user_roles")
    op.drop_table("role_permissions")
    op.drop_table("holidays")
    op.drop_table("users")
    op.drop_table("permissions")
    op.drop_table("roles")
