"""Get permissions linked to a role."""

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.links import LinkUseCase
from backoffice.domain.entities import RolePermission
from backoffice.domain.exceptions import RolePermissionBusinessError
from backoffice.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class GetRolePermissionsUseCase(LinkUseCase):
    error = RolePermissionBusinessError

    async def execute(self, role_id: int, request_info: RequestInfo) -> list[RolePermission]:
        async def work(uow: UnitOfWork) -> list[RolePermission]:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.ROLE_PERMISSIONS, PermissionAction.READ),
            )
            await self._require_role(uow, role_id)
            return await uow.role_permissions.list_by_role(role_id)

        return await self._transactions.execute("GET_ROLE_PERMISSIONS", work)
