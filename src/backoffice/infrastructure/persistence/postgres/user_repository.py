"""PostgreSQL user repository implementation."""

from typing import Any

from psycopg import AsyncConnection

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.domain.entities import User
from backoffice.infrastructure.persistence.postgres.paging import fetch_page

_FIELDS = (
    "username",
    "email",
    "password",
    "first_name",
    "middle_name",
    "last_name",
    "phone",
    "date_of_birth",
    "is_active",
    "is_email_verified",
    "email_verified_at",
    "password_changed_at",
    "password_changed_by",
)
_STAMPS = ("created_by", "created_at", "updated_by", "updated_at", "deleted_by", "deleted_at")
_COLUMNS = ", ".join(("id", *_FIELDS, *_STAMPS))


def _to_user(r: dict[str, Any]) -> User:
    return User(**r)


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _fetch_one(self, where: str, value: object) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE {where} = %s", (value,)
        )
        r = await cur.fetchone()
        return _to_user(r) if r else None

    async def get_by_id(self, user_id: int) -> User | None:
        return await self._fetch_one("id", user_id)

    async def get_by_username(self, username: str) -> User | None:
        return await self._fetch_one("username", username)

    async def get_by_email(self, email: str) -> User | None:
        return await self._fetch_one("email", email)

    async def add(self, user: User) -> User:
        columns = (*_FIELDS, "created_by", "created_at", "updated_by", "updated_at")
        placeholders = ", ".join(["%s"] * len(columns))
        cur = await self._conn.execute(
            f"INSERT INTO users ({', '.join(columns)}) VALUES ({placeholders}) "
            f"RETURNING {_COLUMNS}",
            [getattr(user, c) for c in columns],
        )
        return _to_user(await cur.fetchone())

    async def update(self, user: User) -> None:
        # username is immutable and never written back
        columns = [
            c
            for c in (*_FIELDS, *_STAMPS)
            if c not in ("username", "created_by", "created_at")
        ]
        assignments = ", ".join(f"{c} = %s" for c in columns)
        await self._conn.execute(
            f"UPDATE users SET {assignments} WHERE id = %s",
            [*(getattr(user, c) for c in columns), user.id],
        )

    async def list_page(self, query: PageQuery) -> Page[User]:
        return await fetch_page(
            self._conn,
            f"SELECT {_COLUMNS} FROM users",
            query,
            ("username", "email", "first_name", "last_name"),
            _to_user,
        )

    async def list_active(self) -> list[User]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users "
            "WHERE deleted_at IS NULL AND is_active ORDER BY username"
        )
        return [_to_user(r) for r in await cur.fetchall()]
