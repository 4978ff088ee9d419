"""Unit tests for the PostgreSQL unit of work against a fake pool."""

import logging
from types import SimpleNamespace

import pytest
from psycopg import pq

from backoffice.infrastructure.persistence.postgres.unit_of_work import (
    PostgresUnitOfWork,
    create_uow_provider,
)


class FakeConnection:
    """Tracks statements and the transaction status psycopg would report."""

    def __init__(self) -> None:
        self.closed = False
        self.statements: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self.info = SimpleNamespace(transaction_status=pq.TransactionStatus.IDLE)

    async def execute(self, query, params=None):
        self.statements.append(query)
        self.info.transaction_status = pq.TransactionStatus.INTRANS

    async def commit(self) -> None:
        self.commits += 1
        self.info.transaction_status = pq.TransactionStatus.IDLE

    async def rollback(self) -> None:
        self.rollbacks += 1
        self.info.transaction_status = pq.TransactionStatus.IDLE


class FakeConnectionContext:
    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool

    async def __aenter__(self) -> FakeConnection:
        self._pool.checkouts += 1
        return self._pool.conn

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._pool.exits.append(exc_type)


class FakePool:
    """Stands in for AsyncConnectionPool.connection()."""

    def __init__(self) -> None:
        self.conn = FakeConnection()
        self.checkouts = 0
        self.exits: list[type[BaseException] | None] = []

    def connection(self) -> FakeConnectionContext:
        return FakeConnectionContext(self)


@pytest.mark.asyncio
async def test_not_in_transaction_before_begin() -> None:
    """No connection is checked out until begin."""
    pool = FakePool()
    uow = PostgresUnitOfWork(pool)
    assert uow.in_transaction is False
    assert pool.checkouts == 0


@pytest.mark.asyncio
async def test_begin_sets_isolation_and_commit_ends_transaction() -> None:
    """The isolation level is the first statement; commit leaves the connection idle."""
    pool = FakePool()
    uow = PostgresUnitOfWork(pool, "serializable")

    await uow.begin()
    assert pool.conn.statements == ["SET TRANSACTION ISOLATION LEVEL SERIALIZABLE"]
    assert uow.in_transaction is True
    assert uow.roles is not None and uow.activity_logs is not None

    await uow.commit()
    assert uow.in_transaction is False
    assert pool.conn.commits == 1

    await uow.release()
    assert pool.exits == [None]


@pytest.mark.asyncio
async def test_default_isolation_issues_no_statement() -> None:
    """Without an explicit level the server default applies."""
    pool = FakePool()
    uow = PostgresUnitOfWork(pool)
    await uow.begin()
    assert pool.conn.statements == []
    await uow.release()


@pytest.mark.asyncio
async def test_double_release_exits_once_and_logs(caplog) -> None:
    """A second release never returns the connection again."""
    pool = FakePool()
    uow = PostgresUnitOfWork(pool, "read committed")
    await uow.begin()

    with caplog.at_level(logging.ERROR):
        await uow.release()
        await uow.release()

    assert pool.exits == [None]
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "released twice" in errors[0].getMessage()
    assert uow.in_transaction is False


@pytest.mark.asyncio
async def test_release_passes_error_to_pool() -> None:
    """The pool sees the failure that ended the unit of work."""
    pool = FakePool()
    uow = PostgresUnitOfWork(pool)
    await uow.begin()
    await pool.conn.execute("SELECT 1")
    await uow.rollback()

    await uow.release(RuntimeError("boom"))

    assert pool.conn.rollbacks == 1
    assert pool.exits == [RuntimeError]


@pytest.mark.asyncio
async def test_release_without_begin_is_a_no_op() -> None:
    """Releasing an unopened unit touches no connection."""
    pool = FakePool()
    await PostgresUnitOfWork(pool).release()
    assert pool.checkouts == 0
    assert pool.exits == []


def test_provider_yields_fresh_units() -> None:
    pool = FakePool()
    provider = create_uow_provider(pool, "repeatable read")
    assert provider() is not provider()
