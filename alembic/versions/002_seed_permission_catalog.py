"""Seed the permission catalog and the Admin, Editor and Viewer roles.

Revision ID: 002
Revises: 001
Create Date: 2026-10-16

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CRUD = ["create", "read", "update", "archive", "restore", "combobox", "paginated_list"]

CATALOG: dict[str, list[str]] = {
    "roles": CRUD,
    "permissions": CRUD,
    "users": [*CRUD, "change_password", "verify_email"],
    "holidays": CRUD,
    "role-permissions": ["read", "assign_permissions", "remove_permissions"],
    "user-roles": ["read", "assign_roles", "remove_roles"],
    "user-permissions": ["read", "grant_permissions", "deny_permissions", "remove_overrides"],
    "activity-logs": ["read"],
}

VIEWER_ACTIONS = ("read", "combobox", "paginated_list")
EDITOR_ACTIONS = (*VIEWER_ACTIONS, "create", "update")

ROLES = {
    "Admin": "Full access to every back office resource",
    "Editor": "Create, read and update; cannot archive, restore or manage access",
    "Viewer": "Read-only access",
}

ACCESS_RESOURCES = ("role-permissions", "user-roles", "user-permissions")


def upgrade() -> None:
    conn = op.get_bind()
    for resource, actions in CATALOG.items():
        for action in actions:
            conn.exec_driver_sql(
                "INSERT INTO permissions (name, resource, action, description, created_by, updated_by) "
                "VALUES (%(name)s, %(resource)s, %(action)s, %(description)s, 'system', 'system')",
                {
                    "name": f"{resource}:{action}",
                    "resource": resource,
                    "action": action,
                    "description": f"{action.replace('_', ' ').capitalize()} {resource}",
                },
            )
    for name, description in ROLES.items():
        conn.exec_driver_sql(
            "INSERT INTO roles (name, description, created_by, updated_by) "
            "VALUES (%(name)s, %(description)s, 'system', 'system')",
            {"name": name, "description": description},
        )

    op.execute(
        """
        INSERT INTO role_permissions (role_id, permission_id, created_by)
        SELECT r.id, p.id, 'system' FROM roles r CROSS JOIN permissions p
        WHERE r.name = 'Admin'
        """
    )
    editor = ", ".join(f"'{a}'" for a in EDITOR_ACTIONS)
    viewer = ", ".join(f"'{a}'" for a in VIEWER_ACTIONS)
    access = ", ".join(f"'{r}'" for r in ACCESS_RESOURCES)
    op.execute(
        f"""
        INSERT INTO role_permissions (role_id, permission_id, created_by)
        SELECT r.id, p.id, 'system' FROM roles r CROSS JOIN permissions p
        WHERE r.name = 'Editor' AND p.action IN ({editor})
          AND p.resource NOT IN ({access}) AND p.resource <> 'permissions'
        """
    )
    op.execute(
        f"""
        INSERT INTO role_permissions (role_id, permission_id, created_by)
        SELECT r.id, p.id, 'system' FROM roles r CROSS JOIN permissions p
        WHERE r.name = 'Viewer' AND p.action IN ({viewer})
        """
    )


def downgrade() -> None:
    op.execute(
        "DELETE FROM role_permissions WHERE role_id IN "
        "(SELECT id FROM roles WHERE name IN ('Admin', 'Editor', 'Viewer'))"
    )
    op.execute("DELETE FROM roles WHERE name IN ('Admin', 'Editor', 'Viewer')")
    op.execute("DELETE FROM permissions WHERE created_by = 'system'")
