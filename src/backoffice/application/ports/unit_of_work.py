"""Unit of Work port - transactional boundary."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from backoffice.application.ports.repositories import (
    ActivityLogRepository,
    HolidayRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRepository,
    UserRoleRepository,
)

T = TypeVar("T")


class UnitOfWork(Protocol):
    """One connection, one transaction, and the repositories bound to it."""

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def holidays(self) -> HolidayRepository: ...

    @property
    def role_permissions(self) -> RolePermissionRepository: ...

    @property
    def user_roles(self) -> UserRoleRepository: ...

    @property
    def user_permissions(self) -> UserPermissionRepository: ...

    @property
    def activity_logs(self) -> ActivityLogRepository: ...

    @property
    def in_transaction(self) -> bool: ...

    async def begin(self) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def release(self, exc: BaseException | None = None) -> None: ...


UnitOfWorkProvider = Callable[[], UnitOfWork]


class TransactionExecutor(Protocol):
    """Runs ``work`` atomically and translates storage failures."""

    async def execute(
        self, label: str, work: Callable[[UnitOfWork], Awaitable[T]]
    ) -> T: ...
