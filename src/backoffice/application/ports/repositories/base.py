"""Shared shape of repositories for archivable aggregates."""

from typing import Protocol, TypeVar

from backoffice.application.dto.pagination import Page, PageQuery

T = TypeVar("T")


class ArchivableRepository(Protocol[T]):
    """Port implemented by role, permission, user and holiday repositories."""

    async def get_by_id(self, entity_id: int) -> T | None: ...

    async def add(self, entity: T) -> T: ...

    async def update(self, entity: T) -> None: ...

    async def list_page(self, query: PageQuery) -> Page[T]: ...

    async def list_active(self) -> list[T]: ...
