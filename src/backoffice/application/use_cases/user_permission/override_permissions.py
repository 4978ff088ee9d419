"""Grant and deny permission overrides for a user.

A grant adds a permission no role provides; a deny removes one even when a
role provides it. Writing either for a pair that already has an override
flips it in place.
"""

from typing import ClassVar

from backoffice.application.dto.user_dto import UserPermissionsInput, UserPermissionsOutput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.links import LinkUseCase
from backoffice.domain.entities import UserPermission
from backoffice.domain.exceptions import UserPermissionBusinessError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


def override_state(overrides: list[UserPermission]) -> dict[str, list[int]]:
    return {
        "granted_permission_ids": sorted(o.permission_id for o in overrides if o.is_allowed),
        "denied_permission_ids": sorted(o.permission_id for o in overrides if not o.is_allowed),
    }


class _OverridePermissionsUseCase(LinkUseCase):
    error = UserPermissionBusinessError
    is_allowed: ClassVar[bool]
    permission_action: ClassVar[PermissionAction]
    audit_action: ClassVar[AuditAction]

    async def execute(
        self, data: UserPermissionsInput, request_info: RequestInfo
    ) -> UserPermissionsOutput:
        permission_ids = self._require_ids(data.permission_ids, "permission")

        async def work(uow: UnitOfWork) -> UserPermissionsOutput:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.USER_PERMISSIONS, self.permission_action),
            )
            user = await self._require_user(uow, data.user_id)
            user.ensure_not_archived()
            await self._require_permissions(uow, permission_ids)

            before = await uow.user_permissions.list_by_user(data.user_id)
            if data.replace:
                await uow.user_permissions.remove(data.user_id)
            await uow.user_permissions.upsert_many(
                data.user_id, permission_ids, self.is_allowed, request_info.actor
            )
            after = await uow.user_permissions.list_by_user(data.user_id)

            await self._audit.record(
                uow,
                self.audit_action,
                AuditEntity.USER_PERMISSIONS,
                {
                    "user_id": user.id,
                    "username": user.username,
                    "permission_ids": permission_ids,
                    "is_allowed": self.is_allowed,
                    "replace": data.replace,
                    "changed_fields": diff(override_state(before), override_state(after)),
                    "performed_by": request_info.actor,
                    "performed_at": self._timestamp(),
                },
                request_info,
            )
            effective = await self._permission_checker.effective_permissions(uow, data.user_id)
            return UserPermissionsOutput(
                user_id=data.user_id, overrides=after, effective=sorted(effective)
            )

        return await self._transactions.execute(str(self.audit_action), work)


class GrantPermissionsToUserUseCase(_OverridePermissionsUseCase):
    is_allowed = True
    permission_action = PermissionAction.GRANT_PERMISSIONS
    audit_action = AuditAction.GRANT_PERMISSIONS_TO_USER


class DenyPermissionsToUserUseCase(_OverridePermissionsUseCase):
    is_allowed = False
    permission_action = PermissionAction.DENY_PERMISSIONS
    audit_action = AuditAction.DENY_PERMISSIONS_TO_USER
