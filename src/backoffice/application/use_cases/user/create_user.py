"""Create user use case."""

import dataclasses
from http import HTTPStatus

from backoffice.application.dto.user_dto import UserCreateInput
from backoffice.application.ports.password_hasher import PasswordHasher
from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.unit_of_work import TransactionExecutor, UnitOfWork
from backoffice.application.services.audit_logger import AuditLogger
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.user.user_lifecycle import USER
from backoffice.domain.entities import User
from backoffice.domain.exceptions import UserBusinessError
from backoffice.domain.value_objects import PermissionAction, RequestInfo


class CreateUserUseCase(UseCase):
    def __init__(
        self,
        transaction_executor: TransactionExecutor,
        permission_checker: PermissionChecker,
        audit_logger: AuditLogger,
        password_hasher: PasswordHasher,
    ) -> None:
        super().__init__(transaction_executor, permission_checker, audit_logger)
        self._hasher = password_hasher

    async def execute(self, data: UserCreateInput, request_info: RequestInfo) -> User:
        User.validate_password(data.password)
        profile = {
            k: v
            for k, v in dataclasses.asdict(data).items()
            if k not in ("username", "email", "password")
        }

        async def work(uow: UnitOfWork) -> User:
            await self._authorize(uow, request_info, USER.permission(PermissionAction.CREATE))
            if await uow.users.get_by_username(data.username.strip()):
                raise UserBusinessError(
                    f"Username '{data.username}' is already taken", HTTPStatus.CONFLICT
                )
            if await uow.users.get_by_email(data.email.strip().lower()):
                raise UserBusinessError(
                    f"Email '{data.email}' is already registered", HTTPStatus.CONFLICT
                )
            user = User.create(
                username=data.username,
                email=data.email,
                password_hash=self._hasher.hash(data.password),
                created_by=request_info.actor,
                **profile,
            )
            created = await uow.users.add(user)
            await self._audit.record(
                uow,
                USER.create_action,
                USER.entity,
                {
                    "id": created.id,
                    "created": self._snapshot(created, USER.tracked_fields),
                    "created_by": request_info.actor,
                    "created_at": self._timestamp(),
                },
                request_info,
            )
            return created

        return await self._transactions.execute(str(USER.create_action), work)
