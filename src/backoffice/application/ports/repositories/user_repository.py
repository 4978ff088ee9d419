"""User repository port."""

from typing import Protocol

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: int) -> User | None: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def add(self, user: User) -> User: ...

    async def update(self, user: User) -> None: ...

    async def list_page(self, query: PageQuery) -> Page[User]: ...

    async def list_active(self) -> list[User]: ...
