"""Get a user's overrides and effective permission set."""

from backoffice.application.dto.user_dto import UserPermissionsOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.links import LinkUseCase
from backoffice.domain.exceptions import UserPermissionBusinessError
from backoffice.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class GetUserPermissionsUseCase(LinkUseCase):
    error = UserPermissionBusinessError

    async def execute(self, user_id: int, request_info: RequestInfo) -> UserPermissionsOutput:
        async def work(uow: UnitOfWork) -> UserPermissionsOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.USER_PERMISSIONS, PermissionAction.READ),
            )
            await self._require_user(uow, user_id)
            overrides = await uow.user_permissions.list_by_user(user_id)
            effective = await self._permission_checker.effective_permissions(uow, user_id)
            return UserPermissionsOutput(
                user_id=user_id, overrides=overrides, effective=sorted(effective)
            )

        return await self._transactions.execute("GET_USER_PERMISSIONS", work)
