"""Get roles of a user."""

from backoffice.application.dto.user_dto import UserRolesOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.links import LinkUseCase
from backoffice.domain.exceptions import UserRoleBusinessError
from backoffice.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class GetUserRolesUseCase(LinkUseCase):
    error = UserRoleBusinessError

    async def execute(self, user_id: int, request_info: RequestInfo) -> UserRolesOutput:
        async def work(uow: UnitOfWork) -> UserRolesOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.USER_ROLES, PermissionAction.READ),
            )
            await self._require_user(uow, user_id)
            roles = await uow.user_roles.list_by_user(user_id)
            return UserRolesOutput(user_id=user_id, roles=roles)

        return await self._transactions.execute("GET_USER_ROLES", work)
