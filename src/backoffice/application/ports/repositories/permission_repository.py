"""Permission repository port."""

from typing import Protocol

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission catalog persistence."""

    async def get_by_id(self, permission_id: int) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def get_by_names(self, names: list[str]) -> list[Permission]: ...

    async def get_by_ids(self, permission_ids: list[int]) -> list[Permission]: ...

    async def add(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> None: ...

    async def list_page(self, query: PageQuery) -> Page[Permission]: ...

    async def list_active(self) -> list[Permission]: ...
