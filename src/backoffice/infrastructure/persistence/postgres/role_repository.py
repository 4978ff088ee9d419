"""PostgreSQL role repository implementation."""

from typing import Any

from psycopg import AsyncConnection

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import Role
from backoffice.infrastructure.persistence.postgres.paging import fetch_page

_COLUMNS = (
    "id, name, description, created_by, created_at, updated_by, updated_at, "
    "deleted_by, deleted_at"
)


def _to_role(r: dict[str, Any]) -> Role:
    return Role(**r)


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: int) -> Role | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles WHERE id = %s", (role_id,)
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles WHERE name = %s", (name,)
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_ids(self, role_ids: list[int]) -> list[Role]:
        if not role_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles WHERE id = ANY(%s) ORDER BY id",
            (list(role_ids),),
        )
        return [_to_role(r) for r in await cur.fetchall()]

    async def add(self, role: Role) -> Role:
        cur = await self._conn.execute(
            f"""
            INSERT INTO roles (name, description, created_by, created_at,
                               updated_by, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
            """,
            (
                role.name,
                role.description,
                role.created_by,
                role.created_at,
                role.updated_by,
                role.updated_at,
            ),
        )
        return _to_role(await cur.fetchone())

    async def update(self, role: Role) -> None:
        await self._conn.execute(
            """
            UPDATE roles
            SET name = %s, description = %s, updated_by = %s, updated_at = %s,
                deleted_by = %s, deleted_at = %s
            WHERE id = %s
            """,
            (
                role.name,
                role.description,
                role.updated_by,
                role.updated_at,
                role.deleted_by,
                role.deleted_at,
                role.id,
            ),
        )

    async def list_page(self, query: PageQuery) -> Page[Role]:
        return await fetch_page(
            self._conn,
            f"SELECT {_COLUMNS} FROM roles",
            query,
            ("name", "description"),
            _to_role,
        )

    async def list_active(self) -> list[Role]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM roles WHERE deleted_at IS NULL ORDER BY name"
        )
        return [_to_role(r) for r in await cur.fetchall()]
