"""Remove permission overrides from a user."""

from backoffice.application.dto.user_dto import UserPermissionsInput, UserPermissionsOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase, unique_ids
from backoffice.application.use_cases.user_permission.override_permissions import (
    override_state,
)
from backoffice.domain.exceptions import UserPermissionBusinessError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class RemovePermissionsFromUserUseCase(LinkUseCase):
    """Drop the named overrides, or all of them when none are named.

    The user falls back to whatever their roles provide.
    """

    error = UserPermissionBusinessError

    async def execute(
        self, data: UserPermissionsInput, request_info: RequestInfo
    ) -> UserPermissionsOutput:
        permission_ids = unique_ids(data.permission_ids)

        async def work(uow: UnitOfWork) -> UserPermissionsOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(
                    PermissionResource.USER_PERMISSIONS, PermissionAction.REMOVE_OVERRIDES
                ),
            )
            user = await self._require_user(uow, data.user_id)

            before = await uow.user_permissions.list_by_user(data.user_id)
            removed = await uow.user_permissions.remove(data.user_id, permission_ids)
            after = await uow.user_permissions.list_by_user(data.user_id)

            await self._audit.record(
                uow,
                AuditAction.REMOVE_PERMISSIONS_FROM_USER,
                AuditEntity.USER_PERMISSIONS,
                {
                    "user_id": user.id,
                    "username": user.username,
                    "permission_ids": permission_ids or "all",
                    "removed_count": removed,
                    "changed_fields": diff(override_state(before), override_state(after)),
                    "removed_by": request_info.actor,
                    "removed_at": self._timestamp(),
                },
                request_info,
            )
            effective = await self._permission_checker.effective_permissions(uow, data.user_id)
            return UserPermissionsOutput(
                user_id=data.user_id, overrides=after, effective=sorted(effective)
            )

        return await self._transactions.execute(
            str(AuditAction.REMOVE_PERMISSIONS_FROM_USER), work
        )
