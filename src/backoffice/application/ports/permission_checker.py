"""Permission checker port - RBAC authorization."""

from collections.abc import Iterable
from typing import Protocol

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.domain.value_objects import Decision


class PermissionChecker(Protocol):
    """Resolves permissions on the caller's transaction handle."""

    async def resolve(
        self, uow: UnitOfWork, user_id: int | None, permission: str
    ) -> Decision: ...

    async def has_any_permission(
        self, uow: UnitOfWork, user_id: int | None, permissions: Iterable[str]
    ) -> bool: ...

    async def has_all_permissions(
        self, uow: UnitOfWork, user_id: int | None, permissions: Iterable[str]
    ) -> bool: ...

    async def has_role(
        self, uow: UnitOfWork, user_id: int | None, role_names: Iterable[str]
    ) -> bool: ...

    async def effective_permissions(
        self, uow: UnitOfWork, user_id: int | None
    ) -> set[str]: ...
