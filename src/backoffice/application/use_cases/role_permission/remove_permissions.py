"""Remove permissions from a role."""

from backoffice.application.dto.role_dto import RolePermissionsInput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase, unique_ids
from backoffice.domain.entities import RolePermission
from backoffice.domain.exceptions import RolePermissionBusinessError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class RemovePermissionsFromRoleUseCase(LinkUseCase):
    """Unlink the named permissions, or every permission when none are named."""

    error = RolePermissionBusinessError

    async def execute(
        self, data: RolePermissionsInput, request_info: RequestInfo
    ) -> list[RolePermission]:
        permission_ids = unique_ids(data.permission_ids)

        async def work(uow: UnitOfWork) -> list[RolePermission]:
            await self._authorize(
                uow,
                request_info,
                permission_name(
                    PermissionResource.ROLE_PERMISSIONS, PermissionAction.REMOVE_PERMISSIONS
                ),
            )
            role = await self._require_role(uow, data.role_id)

            before = await uow.role_permissions.list_by_role(data.role_id)
            removed = await uow.role_permissions.remove(data.role_id, permission_ids)
            after = await uow.role_permissions.list_by_role(data.role_id)

            await self._audit.record(
                uow,
                AuditAction.REMOVE_PERMISSIONS_FROM_ROLE,
                AuditEntity.ROLE_PERMISSIONS,
                {
                    "role_id": role.id,
                    "role_name": role.name,
                    "permission_ids": permission_ids or "all",
                    "removed_count": removed,
                    "changed_fields": diff(
                        {"permission_ids": sorted(rp.permission_id for rp in before)},
                        {"permission_ids": sorted(rp.permission_id for rp in after)},
                    ),
                    "removed_by": request_info.actor,
                    "removed_at": self._timestamp(),
                },
                request_info,
            )
            return after

        return await self._transactions.execute(
            str(AuditAction.REMOVE_PERMISSIONS_FROM_ROLE), work
        )
