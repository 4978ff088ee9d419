"""Keyset pagination over ``id`` shared by the aggregate repositories."""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from psycopg import AsyncConnection

from backoffice.application.dto.pagination import Page, PageQuery

T = TypeVar("T")


async def fetch_page(
    conn: AsyncConnection,
    select: str,
    query: PageQuery,
    search_columns: Sequence[str],
    to_entity: Callable[[dict[str, Any]], T],
) -> Page[T]:
    """Run ``select`` (no WHERE clause) with filters, cursor and limit applied."""
    clauses: list[str] = []
    params: list[Any] = []
    if not query.include_archived:
        clauses.append("deleted_at IS NULL")
    if query.search:
        clauses.append("(" + " OR ".join(f"{c} ILIKE %s" for c in search_columns) + ")")
        params.extend([f"%{query.search}%"] * len(search_columns))
    if query.cursor is not None:
        clauses.append("id > %s")
        params.append(query.cursor)
    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    params.append(query.limit + 1)
    cur = await conn.execute(f"{select}{where} ORDER BY id LIMIT %s", params)
    rows = await cur.fetchall()
    items = [to_entity(r) for r in rows[: query.limit]]
    next_cursor = items[-1].id if len(rows) > query.limit and items else None
    return Page(items=items, next_cursor=next_cursor)
