"""PostgreSQL async connection pool."""

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via PoolLifespanMiddleware in ASGI lifespan).
    Rows come back as dicts.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )


async def ping(pool: AsyncConnectionPool) -> bool:
    """Round-trip ``SELECT 1`` on a pooled connection."""
    async with pool.connection() as conn:
        cur = await conn.execute("SELECT 1 AS ok")
        row = await cur.fetchone()
        return bool(row and row["ok"] == 1)
