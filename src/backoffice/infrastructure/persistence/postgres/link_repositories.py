"""PostgreSQL repositories for role_permissions, user_roles and user_permissions.

Inserts are idempotent per pair. ``remove`` with no ids clears the owner.
"""

from collections.abc import Sequence

from psycopg import AsyncConnection

from backoffice.domain.entities import RolePermission, UserPermission, UserRole


class PostgresRolePermissionRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_role(self, role_id: int) -> list[RolePermission]:
        cur = await self._conn.execute(
            """
            SELECT rp.role_id, rp.permission_id, rp.created_by, rp.created_at,
                   p.name AS permission_name
            FROM role_permissions rp
            JOIN permissions p ON p.id = rp.permission_id
            WHERE rp.role_id = %s
            ORDER BY rp.permission_id
            """,
            (role_id,),
        )
        return [RolePermission(**r) for r in await cur.fetchall()]

    async def permission_ids_for_roles(self, role_ids: Sequence[int]) -> set[int]:
        if not role_ids:
            return set()
        cur = await self._conn.execute(
            """
            SELECT DISTINCT rp.permission_id
            FROM role_permissions rp
            JOIN roles r ON r.id = rp.role_id AND r.deleted_at IS NULL
            JOIN permissions p ON p.id = rp.permission_id AND p.deleted_at IS NULL
            WHERE rp.role_id = ANY(%s)
            """,
            (list(role_ids),),
        )
        return {r["permission_id"] for r in await cur.fetchall()}

    async def add_many(
        self, role_id: int, permission_ids: Sequence[int], created_by: str
    ) -> None:
        if not permission_ids:
            return
        await self._conn.execute(
            """
            INSERT INTO role_permissions (role_id, permission_id, created_by, created_at)
            SELECT %s, pid, %s, now() FROM unnest(%s::bigint[]) AS pid
            ON CONFLICT (role_id, permission_id) DO NOTHING
            """,
            (role_id, created_by, list(permission_ids)),
        )

    async def remove(self, role_id: int, permission_ids: Sequence[int] = ()) -> int:
        if permission_ids:
            cur = await self._conn.execute(
                "DELETE FROM role_permissions WHERE role_id = %s AND permission_id = ANY(%s)",
                (role_id, list(permission_ids)),
            )
        else:
            cur = await self._conn.execute(
                "DELETE FROM role_permissions WHERE role_id = %s", (role_id,)
            )
        return cur.rowcount


class PostgresUserRoleRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_user(self, user_id: int) -> list[UserRole]:
        cur = await self._conn.execute(
            """
            SELECT ur.user_id, ur.role_id, ur.created_by, ur.created_at,
                   r.name AS role_name
            FROM user_roles ur
            JOIN roles r ON r.id = ur.role_id
            WHERE ur.user_id = %s
            ORDER BY ur.role_id
            """,
            (user_id,),
        )
        return [UserRole(**r) for r in await cur.fetchall()]

    async def role_ids_for_user(self, user_id: int) -> set[int]:
        cur = await self._conn.execute(
            """
            SELECT ur.role_id
            FROM user_roles ur
            JOIN roles r ON r.id = ur.role_id AND r.deleted_at IS NULL
            WHERE ur.user_id = %s
            """,
            (user_id,),
        )
        return {r["role_id"] for r in await cur.fetchall()}

    async def add_many(self, user_id: int, role_ids: Sequence[int], created_by: str) -> None:
        if not role_ids:
            return
        await self._conn.execute(
            """
            INSERT INTO user_roles (user_id, role_id, created_by, created_at)
            SELECT %s, rid, %s, now() FROM unnest(%s::bigint[]) AS rid
            ON CONFLICT (user_id, role_id) DO NOTHING
            """,
            (user_id, created_by, list(role_ids)),
        )

    async def remove(self, user_id: int, role_ids: Sequence[int] = ()) -> int:
        if role_ids:
            cur = await self._conn.execute(
                "DELETE FROM user_roles WHERE user_id = %s AND role_id = ANY(%s)",
                (user_id, list(role_ids)),
            )
        else:
            cur = await self._conn.execute(
                "DELETE FROM user_roles WHERE user_id = %s", (user_id,)
            )
        return cur.rowcount


class PostgresUserPermissionRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_user(self, user_id: int) -> list[UserPermission]:
        cur = await self._conn.execute(
            """
            SELECT up.user_id, up.permission_id, up.is_allowed, up.created_by,
                   up.created_at, p.name AS permission_name
            FROM user_permissions up
            JOIN permissions p ON p.id = up.permission_id
            WHERE up.user_id = %s
            ORDER BY up.permission_id
            """,
            (user_id,),
        )
        return [UserPermission(**r) for r in await cur.fetchall()]

    async def upsert_many(
        self,
        user_id: int,
        permission_ids: Sequence[int],
        is_allowed: bool,
        created_by: str,
    ) -> None:
        if not permission_ids:
            return
        await self._conn.execute(
            """
            INSERT INTO user_permissions (user_id, permission_id, is_allowed,
                                          created_by, created_at)
            SELECT %s, pid, %s, %s, now() FROM unnest(%s::bigint[]) AS pid
            ON CONFLICT (user_id, permission_id)
            DO UPDATE SET is_allowed = EXCLUDED.is_allowed
            """,
            (user_id, is_allowed, created_by, list(permission_ids)),
        )

    async def remove(self, user_id: int, permission_ids: Sequence[int] = ()) -> int:
        if permission_ids:
            cur = await self._conn.execute(
                "DELETE FROM user_permissions WHERE user_id = %s AND permission_id = ANY(%s)",
                (user_id, list(permission_ids)),
            )
        else:
            cur = await self._conn.execute(
                "DELETE FROM user_permissions WHERE user_id = %s", (user_id,)
            )
        return cur.rowcount
