"""PostgreSQL activity log repository - insert and read, never update."""

from typing import Any

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from backoffice.domain.entities import ActivityLog

_COLUMNS = "id, action, entity, details, employee_id, occurred_at, request_info"


def _to_log(r: dict[str, Any]) -> ActivityLog:
    return ActivityLog(**r)


class PostgresActivityLogRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def add(self, log: ActivityLog) -> ActivityLog:
        # details and request_info arrive as plain JSON data from AuditLogger
        cur = await self._conn.execute(
            f"""
            INSERT INTO activitylogs (action, entity, details, employee_id,
                                      occurred_at, request_info)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
            """,
            (
                log.action,
                log.entity,
                Jsonb(log.details) if log.details is not None else None,
                log.employee_id,
                log.occurred_at,
                Jsonb(log.request_info),
            ),
        )
        return _to_log(await cur.fetchone())

    async def _list(self, where: str, params: tuple, limit: int | None) -> list[ActivityLog]:
        sql = f"SELECT {_COLUMNS} FROM activitylogs{where} ORDER BY occurred_at DESC, id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params = (*params, limit)
        cur = await self._conn.execute(sql, params)
        return [_to_log(r) for r in await cur.fetchall()]

    async def list_all(self, limit: int | None = None) -> list[ActivityLog]:
        return await self._list("", (), limit)

    async def list_by_entity(self, entity: str, limit: int | None = None) -> list[ActivityLog]:
        return await self._list(" WHERE entity = %s", (entity,), limit)

    async def list_by_action(self, action: str, limit: int | None = None) -> list[ActivityLog]:
        return await self._list(" WHERE action = %s", (action,), limit)
