"""Assign roles to a user."""

from backoffice.application.dto.user_dto import UserRolesInput, UserRolesOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase
from backoffice.domain.exceptions import UserRoleBusinessError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class AssignRolesToUserUseCase(LinkUseCase):
    """Add role memberships. With ``replace`` the result is exactly ``role_ids``."""

    error = UserRoleBusinessError

    async def execute(self, data: UserRolesInput, request_info: RequestInfo) -> UserRolesOutput:
        role_ids = self._require_ids(data.role_ids, "role")

        async def work(uow: UnitOfWork) -> UserRolesOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.USER_ROLES, PermissionAction.ASSIGN_ROLES),
            )
            user = await self._require_user(uow, data.user_id)
            user.ensure_not_archived()
            await self._require_roles(uow, role_ids)

            before = await uow.user_roles.list_by_user(data.user_id)
            if data.replace:
                await uow.user_roles.remove(data.user_id)
            await uow.user_roles.add_many(data.user_id, role_ids, request_info.actor)
            after = await uow.user_roles.list_by_user(data.user_id)

            await self._audit.record(
                uow,
                AuditAction.ASSIGN_ROLES_TO_USER,
                AuditEntity.USER_ROLES,
                {
                    "user_id": user.id,
                    "username": user.username,
                    "role_ids": role_ids,
                    "replace": data.replace,
                    "changed_fields": diff(
                        {"role_ids": sorted(ur.role_id for ur in before)},
                        {"role_ids": sorted(ur.role_id for ur in after)},
                    ),
                    "assigned_by": request_info.actor,
                    "assigned_at": self._timestamp(),
                },
                request_info,
            )
            return UserRolesOutput(user_id=data.user_id, roles=after)

        return await self._transactions.execute(str(AuditAction.ASSIGN_ROLES_TO_USER), work)
