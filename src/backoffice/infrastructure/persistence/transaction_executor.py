"""Transaction executor - the single place where commands meet the database."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import psycopg

from backoffice.application.ports.unit_of_work import UnitOfWork, UnitOfWorkProvider
from backoffice.domain.exceptions import BackofficeError
from backoffice.infrastructure.persistence.postgres.errors import (
    describe_database_error,
    translate_database_error,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWorkExecutor:
    """Runs one unit of business logic inside one transaction.

    Commit on success. On failure roll back while the transaction is still
    active, then translate storage errors; a failed rollback is logged and
    the original error still propagates. The connection is released exactly
    once on every path.
    """

    def __init__(
        self,
        uow_provider: UnitOfWorkProvider,
        translate_error: Callable[[BaseException], BaseException] = translate_database_error,
    ) -> None:
        self._uow_provider = uow_provider
        self._translate = translate_error

    async def execute(self, label: str, work: Callable[[UnitOfWork], Awaitable[T]]) -> T:
        uow = self._uow_provider()
        failure: BaseException | None = None
        try:
            await uow.begin()
            logger.debug("[%s] transaction started", label)
            result = await work(uow)
            await uow.commit()
            logger.debug("[%s] transaction committed", label)
            return result
        except BaseException as exc:
            failure = exc
            await self._rollback(uow, label)
            if not isinstance(exc, Exception):
                logger.warning("[%s] transaction aborted: %s", label, type(exc).__name__)
                raise
            translated = self._translate(exc)
            self._log_failure(label, exc)
            if translated is exc:
                raise
            raise translated from exc
        finally:
            await self._release(uow, label, failure)

    async def _rollback(self, uow: UnitOfWork, label: str) -> None:
        if not uow.in_transaction:
            return
        try:
            await uow.rollback()
            logger.debug("[%s] transaction rolled back", label)
        except Exception:
            logger.exception("[%s] rollback failed", label)

    async def _release(
        self, uow: UnitOfWork, label: str, failure: BaseException | None
    ) -> None:
        try:
            await uow.release(failure)
        except Exception:
            logger.exception("[%s] failed to release connection", label)

    @staticmethod
    def _log_failure(label: str, exc: Exception) -> None:
        if isinstance(exc, psycopg.Error):
            logger.error("[%s] database error: %s", label, describe_database_error(exc))
        elif isinstance(exc, BackofficeError):
            logger.warning("[%s] %s: %s", label, exc.code, exc.message)
        else:
            logger.error("[%s] unexpected error", label, exc_info=exc)
