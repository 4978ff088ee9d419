"""Create permission use case."""

from backoffice.application.dto.permission_dto import PermissionCreateInput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.permission.permission_lifecycle import PERMISSION
from backoffice.domain.entities import Permission
from backoffice.domain.value_objects import PermissionAction, RequestInfo


class CreatePermissionUseCase(UseCase):
    async def execute(
        self, data: PermissionCreateInput, request_info: RequestInfo
    ) -> Permission:
        async def work(uow: UnitOfWork) -> Permission:
            await self._authorize(
                uow, request_info, PERMISSION.permission(PermissionAction.CREATE)
            )
            permission = Permission.create(
                resource=data.resource,
                action=data.action,
                name=data.name,
                description=data.description,
                created_by=request_info.actor,
            )
            created = await uow.permissions.add(permission)
            await self._audit.record(
                uow,
                PERMISSION.create_action,
                PERMISSION.entity,
                {
                    "id": created.id,
                    "created": self._snapshot(created, PERMISSION.tracked_fields),
                    "created_by": request_info.actor,
                    "created_at": self._timestamp(),
                },
                request_info,
            )
            return created

        return await self._transactions.execute(str(PERMISSION.create_action), work)
