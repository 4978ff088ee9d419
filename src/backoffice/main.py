"""Application entry point and composition root."""

import logging
from collections.abc import Awaitable, Callable

import psycopg
import uvicorn

from backoffice import __version__
from backoffice.application.ports.password_hasher import PasswordHasher
from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.unit_of_work import TransactionExecutor
from backoffice.application.services.audit_logger import AuditLogger
from backoffice.application.use_cases.activity_log.list_activity_logs import (
    ListActivityLogsUseCase,
)
from backoffice.application.use_cases.holiday.create_holiday import CreateHolidayUseCase
from backoffice.application.use_cases.holiday.holiday_lifecycle import (
    ArchiveHolidayUseCase,
    GetHolidayUseCase,
    HolidayComboboxUseCase,
    ListHolidaysUseCase,
    RestoreHolidayUseCase,
    UpdateHolidayUseCase,
)
from backoffice.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from backoffice.application.use_cases.permission.permission_lifecycle import (
    ArchivePermissionUseCase,
    GetPermissionUseCase,
    ListPermissionsUseCase,
    PermissionComboboxUseCase,
    RestorePermissionUseCase,
    UpdatePermissionUseCase,
)
from backoffice.application.use_cases.role.create_role import CreateRoleUseCase
from backoffice.application.use_cases.role.role_lifecycle import (
    ArchiveRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
    RestoreRoleUseCase,
    RoleComboboxUseCase,
    UpdateRoleUseCase,
)
from backoffice.application.use_cases.role_permission.assign_permissions import (
    AssignPermissionsToRoleUseCase,
)
from backoffice.application.use_cases.role_permission.get_role_permissions import (
    GetRolePermissionsUseCase,
)
from backoffice.application.use_cases.role_permission.remove_permissions import (
    RemovePermissionsFromRoleUseCase,
)
from backoffice.application.use_cases.user.change_password import ChangePasswordUseCase
from backoffice.application.use_cases.user.create_user import CreateUserUseCase
from backoffice.application.use_cases.user.user_lifecycle import (
    ArchiveUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RestoreUserUseCase,
    UpdateUserUseCase,
    UserComboboxUseCase,
)
from backoffice.application.use_cases.user.verify_email import VerifyEmailUseCase
from backoffice.application.use_cases.user_permission.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from backoffice.application.use_cases.user_permission.override_permissions import (
    DenyPermissionsToUserUseCase,
    GrantPermissionsToUserUseCase,
)
from backoffice.application.use_cases.user_permission.remove_overrides import (
    RemovePermissionsFromUserUseCase,
)
from backoffice.application.use_cases.user_role.assign_roles import AssignRolesToUserUseCase
from backoffice.application.use_cases.user_role.get_user_roles import GetUserRolesUseCase
from backoffice.application.use_cases.user_role.remove_roles import RemoveRolesFromUserUseCase
from backoffice.config import get_settings
from backoffice.infrastructure.auth.keycloak_provider import KeycloakProvider
from backoffice.infrastructure.permission.permission_checker import RbacPermissionChecker
from backoffice.infrastructure.persistence.postgres.connection import create_pool, ping
from backoffice.infrastructure.persistence.postgres.unit_of_work import create_uow_provider
from backoffice.infrastructure.persistence.transaction_executor import UnitOfWorkExecutor
from backoffice.infrastructure.security.password_hasher import BcryptPasswordHasher
from backoffice.interfaces.api.app import ApiResources, create_app
from backoffice.interfaces.api.middleware.auth import AuthMiddleware
from backoffice.interfaces.api.middleware.cors import CORSMiddleware
from backoffice.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from backoffice.interfaces.api.middleware.request_logger import RequestLoggerMiddleware
from backoffice.interfaces.api.resources.activity_logs import ActivityLogsResource
from backoffice.interfaces.api.resources.aggregates import (
    AggregateCollectionResource,
    AggregateItemResource,
)
from backoffice.interfaces.api.resources.health import HealthResource
from backoffice.interfaces.api.resources.links import (
    RolePermissionsResource,
    UserPermissionsResource,
    UserRolesResource,
)
from backoffice.interfaces.api.resources.users import UserAccountResource
from backoffice.interfaces.api.schemas import (
    HolidayCreateBody,
    HolidayUpdateBody,
    PermissionCreateBody,
    PermissionUpdateBody,
    RoleCreateBody,
    RoleUpdateBody,
    UserCreateBody,
    UserUpdateBody,
)
from backoffice.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_backoffice_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    transactions = UnitOfWorkExecutor(
        create_uow_provider(pool, settings.transaction_isolation)
    )

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; all requests are anonymous")

    async def database_ready() -> bool:
        try:
            return await ping(pool)
        except psycopg.Error:
            logger.warning("Readiness check failed", exc_info=True)
            return False

    resources = build_resources(
        transactions,
        RbacPermissionChecker(transactions),
        AuditLogger(settings.audit_tz),
        BcryptPasswordHasher(),
        readiness_check=database_ready,
    )
    return create_app(
        resources,
        middleware=[
            PoolLifespanMiddleware(pool),
            RequestLoggerMiddleware(),
            CORSMiddleware(settings.cors_origin_list),
            AuthMiddleware(keycloak, transactions),
        ],
    )


def build_resources(
    transactions: TransactionExecutor,
    checker: PermissionChecker,
    audit: AuditLogger,
    hasher: PasswordHasher,
    readiness_check: Callable[[], Awaitable[bool]] | None = None,
) -> ApiResources:
    """Wire every use case into its API resource."""
    deps = (transactions, checker, audit)
    return ApiResources(
        health=HealthResource(readiness_check),
        roles=AggregateCollectionResource(
            ListRolesUseCase(*deps), CreateRoleUseCase(*deps), RoleComboboxUseCase(*deps),
            RoleCreateBody,
        ),
        role=AggregateItemResource(
            GetRoleUseCase(*deps), UpdateRoleUseCase(*deps), ArchiveRoleUseCase(*deps),
            RestoreRoleUseCase(*deps), RoleUpdateBody,
        ),
        permissions=AggregateCollectionResource(
            ListPermissionsUseCase(*deps), CreatePermissionUseCase(*deps),
            PermissionComboboxUseCase(*deps), PermissionCreateBody,
        ),
        permission=AggregateItemResource(
            GetPermissionUseCase(*deps), UpdatePermissionUseCase(*deps),
            ArchivePermissionUseCase(*deps), RestorePermissionUseCase(*deps),
            PermissionUpdateBody,
        ),
        users=AggregateCollectionResource(
            ListUsersUseCase(*deps), CreateUserUseCase(*deps, hasher),
            UserComboboxUseCase(*deps), UserCreateBody,
        ),
        user=AggregateItemResource(
            GetUserUseCase(*deps), UpdateUserUseCase(*deps), ArchiveUserUseCase(*deps),
            RestoreUserUseCase(*deps), UserUpdateBody,
        ),
        user_account=UserAccountResource(
            ChangePasswordUseCase(*deps, hasher), VerifyEmailUseCase(*deps)
        ),
        holidays=AggregateCollectionResource(
            ListHolidaysUseCase(*deps), CreateHolidayUseCase(*deps),
            HolidayComboboxUseCase(*deps), HolidayCreateBody,
        ),
        holiday=AggregateItemResource(
            GetHolidayUseCase(*deps), UpdateHolidayUseCase(*deps),
            ArchiveHolidayUseCase(*deps), RestoreHolidayUseCase(*deps), HolidayUpdateBody,
        ),
        role_permissions=RolePermissionsResource(
            GetRolePermissionsUseCase(*deps),
            AssignPermissionsToRoleUseCase(*deps),
            RemovePermissionsFromRoleUseCase(*deps),
        ),
        user_roles=UserRolesResource(
            GetUserRolesUseCase(*deps),
            AssignRolesToUserUseCase(*deps),
            RemoveRolesFromUserUseCase(*deps),
        ),
        user_permissions=UserPermissionsResource(
            GetUserPermissionsUseCase(*deps),
            GrantPermissionsToUserUseCase(*deps),
            DenyPermissionsToUserUseCase(*deps),
            RemovePermissionsFromUserUseCase(*deps),
        ),
        activity_logs=ActivityLogsResource(ListActivityLogsUseCase(*deps)),
    )


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("Back office v%s starting (%s)", __version__, settings.environment)
    uvicorn.run(
        "backoffice.main:create_backoffice_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
