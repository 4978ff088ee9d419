"""Repository ports."""

from backoffice.application.ports.repositories.activity_log_repository import (
    ActivityLogRepository,
)
from backoffice.application.ports.repositories.base import ArchivableRepository
from backoffice.application.ports.repositories.holiday_repository import HolidayRepository
from backoffice.application.ports.repositories.link_repositories import (
    RolePermissionRepository,
    UserPermissionRepository,
    UserRoleRepository,
)
from backoffice.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from backoffice.application.ports.repositories.role_repository import RoleRepository
from backoffice.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "ArchivableRepository",
    "HolidayRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserPermissionRepository",
    "UserRepository",
    "UserRoleRepository",
]
