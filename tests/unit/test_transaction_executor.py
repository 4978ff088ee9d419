"""Unit tests for the transaction executor."""

import asyncio
import logging

import pytest
from psycopg import errors as pg_errors

from backoffice.domain.entities import Role
from backoffice.domain.exceptions import (
    InternalDatabaseError,
    RoleBusinessError,
    SerializationFailureError,
    UniqueConstraintError,
)
from backoffice.infrastructure.persistence.transaction_executor import UnitOfWorkExecutor
from tests.conftest import FakeUnitOfWorkProvider


async def _add_role(uow, name: str = "Editor") -> Role:
    return await uow.roles.add(Role.create(name, None, created_by="admin"))


@pytest.mark.asyncio
async def test_commits_on_success(executor, uow_provider: FakeUnitOfWorkProvider) -> None:
    """Work result is returned and its writes are committed."""
    role = await executor.execute("CREATE_ROLE", _add_role)

    uow = uow_provider.last
    assert uow.committed and not uow.rolled_back
    assert role.id in uow_provider.db.tables.roles
    assert uow.release_calls == [None]


@pytest.mark.asyncio
async def test_business_error_rolls_back_and_propagates(
    executor, uow_provider: FakeUnitOfWorkProvider
) -> None:
    """A domain error rolls back the writes and reaches the caller unchanged."""
    error = RoleBusinessError("Role is already archived.", 409)

    async def work(uow):
        await _add_role(uow)
        raise error

    with pytest.raises(RoleBusinessError) as exc_info:
        await executor.execute("ARCHIVE_ROLE", work)

    assert exc_info.value is error
    uow = uow_provider.last
    assert uow.rolled_back and not uow.committed
    assert uow_provider.db.tables.roles == {}
    assert uow.release_calls == [error]


@pytest.mark.asyncio
async def test_database_error_is_translated(executor, uow_provider) -> None:
    """A unique violation surfaces as UNIQUE_CONSTRAINT_VIOLATION (409)."""

    async def work(uow):
        await _add_role(uow)
        raise pg_errors.UniqueViolation("duplicate key value violates unique constraint")

    with pytest.raises(UniqueConstraintError) as exc_info:
        await executor.execute("UPDATE_ROLE", work)

    assert exc_info.value.status_code == 409
    assert str(exc_info.value.code) == "UNIQUE_CONSTRAINT_VIOLATION"
    assert isinstance(exc_info.value.__cause__, pg_errors.UniqueViolation)
    assert uow_provider.db.tables.roles == {}


@pytest.mark.asyncio
async def test_storage_error_replaces_pending_business_outcome(executor) -> None:
    """A database failure during work wins over what the work meant to return."""

    async def work(uow):
        role = await _add_role(uow)
        role.update({"name": "Admin"}, "admin")
        await uow.roles.update(role)
        raise pg_errors.UniqueViolation("roles_name_key")

    with pytest.raises(UniqueConstraintError):
        await executor.execute("UPDATE_ROLE", work)


@pytest.mark.asyncio
async def test_serialization_failure_is_retryable(executor) -> None:
    """Deadlocks map to a retryable error."""

    async def work(uow):
        raise pg_errors.DeadlockDetected("deadlock detected")

    with pytest.raises(SerializationFailureError) as exc_info:
        await executor.execute("ASSIGN_ROLES_TO_USER", work)
    assert exc_info.value.retryable is True


@pytest.mark.asyncio
async def test_commit_failure_is_translated(uow_provider) -> None:
    """A failing commit is rolled back, translated and released."""

    def provider():
        uow = uow_provider()
        uow.fail_on_commit = pg_errors.SerializationFailure("could not serialize access")
        return uow

    executor = UnitOfWorkExecutor(provider)
    with pytest.raises(SerializationFailureError):
        await executor.execute("CREATE_ROLE", _add_role)

    uow = uow_provider.last
    assert uow.rolled_back
    assert len(uow.release_calls) == 1
    assert uow_provider.db.tables.roles == {}


@pytest.mark.asyncio
async def test_rollback_failure_is_logged_and_original_error_wins(
    uow_provider, caplog
) -> None:
    """If rollback fails, the original error still propagates."""

    def provider():
        uow = uow_provider()
        uow.fail_on_rollback = RuntimeError("connection reset during rollback")
        return uow

    executor = UnitOfWorkExecutor(provider)
    original = RoleBusinessError("Role name is required")

    async def work(uow):
        raise original

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RoleBusinessError) as exc_info:
            await executor.execute("CREATE_ROLE", work)

    assert exc_info.value is original
    assert "rollback failed" in caplog.text
    assert len(uow_provider.last.release_calls) == 1


@pytest.mark.asyncio
async def test_no_rollback_after_transaction_ended(uow_provider) -> None:
    """Rollback is skipped when the transaction is no longer active."""

    def provider():
        uow = uow_provider()
        uow.fail_on_rollback = AssertionError("rollback must not run")
        return uow

    executor = UnitOfWorkExecutor(provider)

    async def work(uow):
        await uow.commit()
        raise ValueError("after commit")

    with pytest.raises(ValueError, match="after commit"):
        await executor.execute("LABEL", work)
    assert not uow_provider.last.rolled_back


@pytest.mark.asyncio
async def test_release_failure_is_logged(uow_provider, caplog) -> None:
    """A failing release is logged and does not hide the result."""

    def provider():
        uow = uow_provider()
        uow.fail_on_release = RuntimeError("pool closed")
        return uow

    executor = UnitOfWorkExecutor(provider)
    with caplog.at_level(logging.ERROR):
        role = await executor.execute("CREATE_ROLE", _add_role)

    assert role.name == "Editor"
    assert "failed to release connection" in caplog.text


@pytest.mark.asyncio
async def test_unknown_errors_propagate_untranslated(executor, uow_provider, caplog) -> None:
    """Non-storage exceptions keep their type and are logged."""

    async def work(uow):
        raise KeyError("missing")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(KeyError):
            await executor.execute("LABEL", work)
    assert uow_provider.last.rolled_back
    assert "unexpected error" in caplog.text


@pytest.mark.asyncio
async def test_unmapped_database_error_is_internal(executor) -> None:
    """Database errors without a mapping become InternalDatabaseError."""

    async def work(uow):
        raise pg_errors.UndefinedColumn("column does not exist")

    with pytest.raises(InternalDatabaseError):
        await executor.execute("LABEL", work)


@pytest.mark.asyncio
async def test_cancellation_rolls_back_and_releases(executor, uow_provider) -> None:
    """Cancellation is not translated, but still rolls back and releases."""

    async def work(uow):
        await _add_role(uow)
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await executor.execute("CREATE_ROLE", work)

    uow = uow_provider.last
    assert uow.rolled_back
    assert len(uow.release_calls) == 1
    assert isinstance(uow.release_calls[0], asyncio.CancelledError)
    assert uow_provider.db.tables.roles == {}


@pytest.mark.asyncio
async def test_each_execution_gets_its_own_unit_of_work(executor, uow_provider) -> None:
    """Every call begins a fresh transaction."""
    await executor.execute("A", _add_role)
    await executor.execute("B", lambda uow: _add_role(uow, "Viewer"))

    assert len(uow_provider.created) == 2
    assert {r.name for r in uow_provider.db.tables.roles.values()} == {"Editor", "Viewer"}
