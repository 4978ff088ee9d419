"""Role repository port."""

from typing import Protocol

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: int) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def get_by_ids(self, role_ids: list[int]) -> list[Role]: ...

    async def add(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def list_page(self, query: PageQuery) -> Page[Role]: ...

    async def list_active(self) -> list[Role]: ...
