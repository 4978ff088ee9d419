"""Holiday repository port."""

from typing import Protocol

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Holiday


class HolidayRepository(Protocol):
    async def get_by_id(self, holiday_id: int) -> Holiday | None: ...

    async def add(self, holiday: Holiday) -> Holiday: ...

    async def update(self, holiday: Holiday) -> None: ...

    async def list_page(self, query: PageQuery) -> Page[Holiday]: ...

    async def list_active(self) -> list[Holiday]: ...
