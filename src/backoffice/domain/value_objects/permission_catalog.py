"""Permission catalog - resources and actions that make up `resource:action` names."""

from enum import StrEnum


class PermissionResource(StrEnum):
    """Resources guarded by permissions."""

    ROLES = "roles"
    PERMISSIONS = "permissions"
    USERS = "users"
    USER_ROLES = "user-roles"
    USER_PERMISSIONS = "user-permissions"
    ROLE_PERMISSIONS = "role-permissions"
    HOLIDAYS = "holidays"
    ACTIVITY_LOGS = "activity-logs"


class PermissionAction(StrEnum):
    """Actions that can be performed on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    ARCHIVE = "archive"
    RESTORE = "restore"
    COMBOBOX = "combobox"
    PAGINATED_LIST = "paginated_list"
    CHANGE_PASSWORD = "change_password"
    VERIFY_EMAIL = "verify_email"
    ASSIGN_PERMISSIONS = "assign_permissions"
    REMOVE_PERMISSIONS = "remove_permissions"
    ASSIGN_ROLES = "assign_roles"
    REMOVE_ROLES = "remove_roles"
    GRANT_PERMISSIONS = "grant_permissions"
    DENY_PERMISSIONS = "deny_permissions"
    REMOVE_OVERRIDES = "remove_overrides"


def permission_name(resource: PermissionResource | str, action: PermissionAction | str) -> str:
    """Build the unique permission name, e.g. ``users:update``."""
    return f"{resource}:{action}"


def split_permission_name(name: str) -> tuple[str, str]:
    """Split ``resource:action`` into its parts."""
    resource, sep, action = name.partition(":")
    if not sep or not resource or not action:
        raise ValueError(f"Permission name must look like 'resource:action', got {name!r}")
    return resource, action
