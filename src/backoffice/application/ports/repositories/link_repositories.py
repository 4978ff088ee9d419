"""Ports for association tables.

``remove`` with an empty id list removes every link of the owner.
``add_many`` is idempotent for pairs that already exist.
"""

from collections.abc import Sequence
from typing import Protocol

from backoffice.domain.entities import RolePermission, UserPermission, UserRole


class RolePermissionRepository(Protocol):
    async def list_by_role(self, role_id: int) -> list[RolePermission]: ...

    async def permission_ids_for_roles(self, role_ids: Sequence[int]) -> set[int]:
        """Active (non-archived) permission ids reachable from the roles."""
        ...

    async def add_many(
        self, role_id: int, permission_ids: Sequence[int], created_by: str
    ) -> None: ...

    async def remove(self, role_id: int, permission_ids: Sequence[int] = ()) -> int: ...


class UserRoleRepository(Protocol):
    async def list_by_user(self, user_id: int) -> list[UserRole]: ...

    async def role_ids_for_user(self, user_id: int) -> set[int]:
        """Ids of the user's active (non-archived) roles."""
        ...

    async def add_many(
        self, user_id: int, role_ids: Sequence[int], created_by: str
    ) -> None: ...

    async def remove(self, user_id: int, role_ids: Sequence[int] = ()) -> int: ...


class UserPermissionRepository(Protocol):
    async def list_by_user(self, user_id: int) -> list[UserPermission]: ...

    async def upsert_many(
        self,
        user_id: int,
        permission_ids: Sequence[int],
        is_allowed: bool,
        created_by: str,
    ) -> None:
        """Insert overrides, flipping ``is_allowed`` on pairs that already exist."""
        ...

    async def remove(self, user_id: int, permission_ids: Sequence[int] = ()) -> int: ...
