"""Create role use case."""

from backoffice.application.dto.role_dto import RoleCreateInput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.role.role_lifecycle import ROLE
from backoffice.domain.entities import Role
from backoffice.domain.value_objects import PermissionAction, RequestInfo


class CreateRoleUseCase(UseCase):
    async def execute(self, data: RoleCreateInput, request_info: RequestInfo) -> Role:
        async def work(uow: UnitOfWork) -> Role:
            await self._authorize(uow, request_info, ROLE.permission(PermissionAction.CREATE))
            role = Role.create(data.name, data.description, request_info.actor)
            created = await uow.roles.add(role)
            await self._audit.record(
                uow,
                ROLE.create_action,
                ROLE.entity,
                {
                    "id": created.id,
                    "created": self._snapshot(created, ROLE.tracked_fields),
                    "created_by": request_info.actor,
                    "created_at": self._timestamp(),
                },
                request_info,
            )
            return created

        return await self._transactions.execute(str(ROLE.create_action), work)
