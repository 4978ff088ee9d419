"""Assign permissions to a role."""

from backoffice.application.dto.role_dto import RolePermissionsInput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase
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


class AssignPermissionsToRoleUseCase(LinkUseCase):
    """Link permissions to a role.

    Existing pairs are left untouched. With ``replace`` the role's current
    links are deleted first, in the same transaction.
    """

    error = RolePermissionBusinessError

    async def execute(
        self, data: RolePermissionsInput, request_info: RequestInfo
    ) -> list[RolePermission]:
        permission_ids = self._require_ids(data.permission_ids, "permission")

        async def work(uow: UnitOfWork) -> list[RolePermission]:
            await self._authorize(
                uow,
                request_info,
                permission_name(
                    PermissionResource.ROLE_PERMISSIONS, PermissionAction.ASSIGN_PERMISSIONS
                ),
            )
            role = await self._require_role(uow, data.role_id)
            role.ensure_not_archived()
            await self._require_permissions(uow, permission_ids)

            before = await uow.role_permissions.list_by_role(data.role_id)
            if data.replace:
                await uow.role_permissions.remove(data.role_id)
            await uow.role_permissions.add_many(
                data.role_id, permission_ids, request_info.actor
            )
            after = await uow.role_permissions.list_by_role(data.role_id)

            await self._audit.record(
                uow,
                AuditAction.ASSIGN_PERMISSIONS_TO_ROLE,
                AuditEntity.ROLE_PERMISSIONS,
                {
                    "role_id": role.id,
                    "role_name": role.name,
                    "permission_ids": permission_ids,
                    "replace": data.replace,
                    "changed_fields": diff(
                        {"permission_ids": sorted(rp.permission_id for rp in before)},
                        {"permission_ids": sorted(rp.permission_id for rp in after)},
                    ),
                    "assigned_by": request_info.actor,
                    "assigned_at": self._timestamp(),
                },
                request_info,
            )
            return after

        return await self._transactions.execute(
            str(AuditAction.ASSIGN_PERMISSIONS_TO_ROLE), work
        )
