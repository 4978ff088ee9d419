"""Remove roles from a user."""

from backoffice.application.dto.user_dto import UserRolesInput, UserRolesOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase, unique_ids
from backoffice.domain.exceptions import UserRoleBusinessError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class RemoveRolesFromUserUseCase(LinkUseCase):
    """Remove the named roles, or every role when none are named."""

    error = UserRoleBusinessError

    async def execute(self, data: UserRolesInput, request_info: RequestInfo) -> UserRolesOutput:
        role_ids = unique_ids(data.role_ids)

        async def work(uow: UnitOfWork) -> UserRolesOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.USER_ROLES, PermissionAction.REMOVE_ROLES),
            )
            user = await self._require_user(uow, data.user_id)

            before = await uow.user_roles.list_by_user(data.user_id)
            removed = await uow.user_roles.remove(data.user_id, role_ids)
            after = await uow.user_roles.list_by_user(data.user_id)

            await self._audit.record(
                uow,
                AuditAction.REMOVE_ROLES_FROM_USER,
                AuditEntity.USER_ROLES,
                {
                    "user_id": user.id,
                    "username": user.username,
                    "role_ids": role_ids or "all",
                    "removed_count": removed,
                    "changed_fields": diff(
                        {"role_ids": sorted(ur.role_id for ur in before)},
                        {"role_ids": sorted(ur.role_id for ur in after)},
                    ),
                    "removed_by": request_info.actor,
                    "removed_at": self._timestamp(),
                },
                request_info,
            )
            return UserRolesOutput(user_id=data.user_id, roles=after)

        return await self._transactions.execute(str(AuditAction.REMOVE_ROLES_FROM_USER), work)
