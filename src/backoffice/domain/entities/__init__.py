"""Domain entities."""

from backoffice.domain.entities.activity_log import ActivityLog
from backoffice.domain.entities.base import AuditedEntity
from backoffice.domain.entities.holiday import Holiday
from backoffice.domain.entities.links import RolePermission, UserPermission, UserRole
from backoffice.domain.entities.permission import Permission
from backoffice.domain.entities.role import Role
from backoffice.domain.entities.user import User

__all__ = [
    "ActivityLog",
    "AuditedEntity",
    "Holiday",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "UserPermission",
    "UserRole",
]
