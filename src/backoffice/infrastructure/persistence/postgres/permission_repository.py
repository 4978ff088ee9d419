"""PostgreSQL permission repository implementation."""

from typing import Any

from psycopg import AsyncConnection

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Permission
from backoffice.infrastructure.persistence.postgres.paging import fetch_page

_COLUMNS = (
    "id, name, resource, action, description, created_by, created_at, "
    "updated_by, updated_at, deleted_by, deleted_at"
)


def _to_permission(r: dict[str, Any]) -> Permission:
    return Permission(**r)


class PostgresPermissionRepository:
    """Permission catalog repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: int) -> Permission | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE id = %s", (permission_id,)
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE name = %s", (name,)
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def get_by_names(self, names: list[str]) -> list[Permission]:
        if not names:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE name = ANY(%s)", (list(names),)
        )
        return [_to_permission(r) for r in await cur.fetchall()]

    async def get_by_ids(self, permission_ids: list[int]) -> list[Permission]:
        if not permission_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE id = ANY(%s) ORDER BY id",
            (list(permission_ids),),
        )
        return [_to_permission(r) for r in await cur.fetchall()]

    async def add(self, permission: Permission) -> Permission:
        cur = await self._conn.execute(
            f"""
            INSERT INTO permissions (name, resource, action, description,
                                     created_by, created_at, updated_by, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
            """,
            (
                permission.name,
                permission.resource,
                permission.action,
                permission.description,
                permission.created_by,
                permission.created_at,
                permission.updated_by,
                permission.updated_at,
            ),
        )
        return _to_permission(await cur.fetchone())

    async def update(self, permission: Permission) -> None:
        await self._conn.execute(
            """
            UPDATE permissions
            SET name = %s, resource = %s, action = %s, description = %s,
                updated_by = %s, updated_at = %s, deleted_by = %s, deleted_at = %s
            WHERE id = %s
            """,
            (
                permission.name,
                permission.resource,
                permission.action,
                permission.description,
                permission.updated_by,
                permission.updated_at,
                permission.deleted_by,
                permission.deleted_at,
                permission.id,
            ),
        )

    async def list_page(self, query: PageQuery) -> Page[Permission]:
        return await fetch_page(
            self._conn,
            f"SELECT {_COLUMNS} FROM permissions",
            query,
            ("name", "resource", "action"),
            _to_permission,
        )

    async def list_active(self) -> list[Permission]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permissions WHERE deleted_at IS NULL ORDER BY name"
        )
        return [_to_permission(r) for r in await cur.fetchall()]
