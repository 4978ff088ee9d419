"""Change password use case."""

from http import HTTPStatus

from backoffice.application.ports.password_hasher import PasswordHasher
from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.unit_of_work import TransactionExecutor, UnitOfWork
from backoffice.application.services.audit_logger import AuditLogger
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.user.user_lifecycle import USER
from backoffice.domain.entities import User
from backoffice.domain.exceptions import UserBusinessError
from backoffice.domain.value_objects import AuditAction, PermissionAction, RequestInfo


class ChangePasswordUseCase(UseCase):
    """Replace a user's password. The hash never reaches the audit trail."""

    def __init__(
        self,
        transaction_executor: TransactionExecutor,
        permission_checker: PermissionChecker,
        audit_logger: AuditLogger,
        password_hasher: PasswordHasher,
    ) -> None:
        super().__init__(transaction_executor, permission_checker, audit_logger)
        self._hasher = password_hasher

    async def execute(
        self, user_id: int, new_password: str, request_info: RequestInfo
    ) -> User:
        User.validate_password(new_password)

        async def work(uow: UnitOfWork) -> User:
            await self._authorize(
                uow, request_info, USER.permission(PermissionAction.CHANGE_PASSWORD)
            )
            user = await uow.users.get_by_id(user_id)
            if user is None:
                raise UserBusinessError(
                    f"User with ID {user_id} not found.", HTTPStatus.NOT_FOUND
                )
            user.change_password(self._hasher.hash(new_password), request_info.actor)
            await uow.users.update(user)
            await self._audit.record(
                uow,
                AuditAction.CHANGE_PASSWORD,
                USER.entity,
                {
                    "id": user_id,
                    "explanation": f"Password of {user.username} changed by {request_info.actor}",
                    "changed_by": request_info.actor,
                    "changed_at": self._timestamp(),
                },
                request_info,
            )
            return user

        return await self._transactions.execute(str(AuditAction.CHANGE_PASSWORD), work)
