"""Verify email use case."""

from http import HTTPStatus

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.user.user_lifecycle import USER
from backoffice.domain.entities import User
from backoffice.domain.exceptions import UserBusinessError
from backoffice.domain.value_objects import AuditAction, PermissionAction, RequestInfo

_FIELDS = ("is_email_verified", "email_verified_at")


class VerifyEmailUseCase(UseCase):
    async def execute(self, user_id: int, request_info: RequestInfo) -> User:
        async def work(uow: UnitOfWork) -> User:
            await self._authorize(
                uow, request_info, USER.permission(PermissionAction.VERIFY_EMAIL)
            )
            user = await uow.users.get_by_id(user_id)
            if user is None:
                raise UserBusinessError(
                    f"User with ID {user_id} not found.", HTTPStatus.NOT_FOUND
                )
            before = self._snapshot(user, _FIELDS)
            user.verify_email(request_info.actor)
            await uow.users.update(user)

            verified = await uow.users.get_by_id(user_id)
            await self._audit.record(
                uow,
                AuditAction.VERIFY_EMAIL,
                USER.entity,
                {
                    "id": user_id,
                    "changed_fields": diff(before, self._snapshot(verified, _FIELDS)),
                    "verified_by": request_info.actor,
                    "verified_at": self._timestamp(),
                },
                request_info,
            )
            return verified

        return await self._transactions.execute(str(AuditAction.VERIFY_EMAIL), work)
