"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import Callable
from typing import Literal

from psycopg import AsyncConnection, pq
from psycopg_pool import AsyncConnectionPool

from backoffice.infrastructure.persistence.postgres.activity_log_repository import (
    PostgresActivityLogRepository,
)
from backoffice.infrastructure.persistence.postgres.holiday_repository import (
    PostgresHolidayRepository,
)
from backoffice.infrastructure.persistence.postgres.link_repositories import (
    PostgresRolePermissionRepository,
    PostgresUserPermissionRepository,
    PostgresUserRoleRepository,
)
from backoffice.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from backoffice.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from backoffice.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger(__name__)

IsolationLevel = Literal["read committed", "repeatable read", "serializable"]

_SET_ISOLATION = {
    "read committed": "SET TRANSACTION ISOLATION LEVEL READ COMMITTED",
    "repeatable read": "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ",
    "serializable": "SET TRANSACTION ISOLATION LEVEL SERIALIZABLE",
}


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one pooled connection, one transaction.

    ``begin`` checks a connection out of the pool and ``release`` returns it.
    Release happens once; later calls are logged and ignored.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        isolation_level: IsolationLevel | None = None,
    ) -> None:
        self._pool = pool
        self._isolation_level = isolation_level
        self._conn: AsyncConnection | None = None
        self._conn_cm: object | None = None
        self._released = False

    async def begin(self) -> None:
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._bind(self._conn)
        if self._isolation_level:
            # First statement of the transaction psycopg opens implicitly.
            await self._conn.execute(_SET_ISOLATION[self._isolation_level])

    def _bind(self, conn: AsyncConnection) -> None:
        self._roles = PostgresRoleRepository(conn)
        self._permissions = PostgresPermissionRepository(conn)
        self._users = PostgresUserRepository(conn)
        self._holidays = PostgresHolidayRepository(conn)
        self._role_permissions = PostgresRolePermissionRepository(conn)
        self._user_roles = PostgresUserRoleRepository(conn)
        self._user_permissions = PostgresUserPermissionRepository(conn)
        self._activity_logs = PostgresActivityLogRepository(conn)

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def holidays(self) -> PostgresHolidayRepository:
        return self._holidays

    @property
    def role_permissions(self) -> PostgresRolePermissionRepository:
        return self._role_permissions

    @property
    def user_roles(self) -> PostgresUserRoleRepository:
        return self._user_roles

    @property
    def user_permissions(self) -> PostgresUserPermissionRepository:
        return self._user_permissions

    @property
    def activity_logs(self) -> PostgresActivityLogRepository:
        return self._activity_logs

    @property
    def in_transaction(self) -> bool:
        if self._conn is None or self._conn.closed:
            return False
        return self._conn.info.transaction_status != pq.TransactionStatus.IDLE

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()

    async def release(self, exc: BaseException | None = None) -> None:
        if self._released:
            logger.error("Unit of work released twice; ignoring")
            return
        self._released = True
        if self._conn_cm is None:
            return
        cm, self._conn_cm, self._conn = self._conn_cm, None, None
        if exc is None:
            await cm.__aexit__(None, None, None)
        else:
            await cm.__aexit__(type(exc), exc, exc.__traceback__)


def create_uow_provider(
    pool: AsyncConnectionPool,
    isolation_level: IsolationLevel | None = None,
) -> Callable[[], PostgresUnitOfWork]:
    """Create UnitOfWork provider; each call yields a fresh, unopened unit."""

    def provider() -> PostgresUnitOfWork:
        return PostgresUnitOfWork(pool, isolation_level)

    return provider
