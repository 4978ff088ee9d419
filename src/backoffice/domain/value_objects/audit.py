"""Audit trail vocabulary."""

from enum import StrEnum


class AuditEntity(StrEnum):
    """Logical resource names recorded in the activity log (table names)."""

    ROLES = "roles"
    PERMISSIONS = "permissions"
    USERS = "users"
    HOLIDAYS = "holidays"
    ROLE_PERMISSIONS = "role_permissions"
    USER_ROLES = "user_roles"
    USER_PERMISSIONS = "user_permissions"
    ACTIVITY_LOGS = "activitylogs"


class AuditAction(StrEnum):
    """Mutating actions written to the activity log."""

    CREATE_ROLE = "CREATE_ROLE"
    UPDATE_ROLE = "UPDATE_ROLE"
    ARCHIVE_ROLE = "ARCHIVE_ROLE"
    RESTORE_ROLE = "RESTORE_ROLE"

    CREATE_PERMISSION = "CREATE_PERMISSION"
    UPDATE_PERMISSION = "UPDATE_PERMISSION"
    ARCHIVE_PERMISSION = "ARCHIVE_PERMISSION"
    RESTORE_PERMISSION = "RESTORE_PERMISSION"

    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    ARCHIVE_USER = "ARCHIVE_USER"
    RESTORE_USER = "RESTORE_USER"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    VERIFY_EMAIL = "VERIFY_EMAIL"

    CREATE_HOLIDAY = "CREATE_HOLIDAY"
    UPDATE_HOLIDAY = "UPDATE_HOLIDAY"
    ARCHIVE_HOLIDAY = "ARCHIVE_HOLIDAY"
    RESTORE_HOLIDAY = "RESTORE_HOLIDAY"

    ASSIGN_PERMISSIONS_TO_ROLE = "ASSIGN_PERMISSIONS_TO_ROLE"
    REMOVE_PERMISSIONS_FROM_ROLE = "REMOVE_PERMISSIONS_FROM_ROLE"
    ASSIGN_ROLES_TO_USER = "ASSIGN_ROLES_TO_USER"
    REMOVE_ROLES_FROM_USER = "REMOVE_ROLES_FROM_USER"
    GRANT_PERMISSIONS_TO_USER = "GRANT_PERMISSIONS_TO_USER"
    DENY_PERMISSIONS_TO_USER = "DENY_PERMISSIONS_TO_USER"
    REMOVE_PERMISSIONS_FROM_USER = "REMOVE_PERMISSIONS_FROM_USER"
