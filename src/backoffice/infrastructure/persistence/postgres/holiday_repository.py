"""PostgreSQL holiday repository implementation."""

from typing import Any

from psycopg import AsyncConnection

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Holiday
from backoffice.infrastructure.persistence.postgres.paging import fetch_page

_COLUMNS = (
    "id, name, date, type, description, is_recurring, created_by, created_at, "
    "updated_by, updated_at, deleted_by, deleted_at"
)


def _to_holiday(r: dict[str, Any]) -> Holiday:
    return Holiday(**r)


class PostgresHolidayRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, holiday_id: int) -> Holiday | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM holidays WHERE id = %s", (holiday_id,)
        )
        r = await cur.fetchone()
        return _to_holiday(r) if r else None

    async def add(self, holiday: Holiday) -> Holiday:
        cur = await self._conn.execute(
            f"""
            INSERT INTO holidays (name, date, type, description, is_recurring,
                                  created_by, created_at, updated_by, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
            """,
            (
                holiday.name,
                holiday.date,
                holiday.type,
                holiday.description,
                holiday.is_recurring,
                holiday.created_by,
                holiday.created_at,
                holiday.updated_by,
                holiday.updated_at,
            ),
        )
        return _to_holiday(await cur.fetchone())

    async def update(self, holiday: Holiday) -> None:
        await self._conn.execute(
            """
            UPDATE holidays
            SET name = %s, date = %s, type = %s, description = %s, is_recurring = %s,
                updated_by = %s, updated_at = %s, deleted_by = %s, deleted_at = %s
            WHERE id = %s
            """,
            (
                holiday.name,
                holiday.date,
                holiday.type,
                holiday.description,
                holiday.is_recurring,
                holiday.updated_by,
                holiday.updated_at,
                holiday.deleted_by,
                holiday.deleted_at,
                holiday.id,
            ),
        )

    async def list_page(self, query: PageQuery) -> Page[Holiday]:
        return await fetch_page(
            self._conn,
            f"SELECT {_COLUMNS} FROM holidays",
            query,
            ("name", "type"),
            _to_holiday,
        )

    async def list_active(self) -> list[Holiday]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM holidays WHERE deleted_at IS NULL ORDER BY date, name"
        )
        return [_to_holiday(r) for r in await cur.fetchall()]
