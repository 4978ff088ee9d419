"""Shared wiring for use cases: transaction, authorization and audit."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.repositories import ArchivableRepository
from backoffice.application.ports.unit_of_work import TransactionExecutor, UnitOfWork
from backoffice.application.services.audit_logger import AuditLogger
from backoffice.application.services.authorization import require_permission
from backoffice.application.services.change_tracker import (
    Snapshot,
    TrackedField,
    extract_state,
    in_timezone,
)
from backoffice.domain.exceptions import BusinessRuleError
from backoffice.domain.value_objects import (
    AuditAction,
    AuditEntity,
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


@dataclass(frozen=True)
class Aggregate:
    """Describes one archivable aggregate to the generic use cases."""

    label: str
    repository: str
    resource: PermissionResource
    entity: AuditEntity
    error: type[BusinessRuleError]
    tracked_fields: Sequence[str]
    create_action: AuditAction
    update_action: AuditAction
    archive_action: AuditAction
    restore_action: AuditAction

    def repo(self, uow: UnitOfWork) -> ArchivableRepository[Any]:
        return getattr(uow, self.repository)

    def permission(self, action: PermissionAction) -> str:
        return permission_name(self.resource, action)


class UseCase:
    """Base for use cases. Every ``execute`` runs inside one transaction."""

    def __init__(
        self,
        transaction_executor: TransactionExecutor,
        permission_checker: PermissionChecker,
        audit_logger: AuditLogger,
    ) -> None:
        self._transactions = transaction_executor
        self._permission_checker = permission_checker
        self._audit = audit_logger

    async def _authorize(
        self, uow: UnitOfWork, request_info: RequestInfo, *permissions: str
    ) -> None:
        await require_permission(self._permission_checker, uow, request_info, *permissions)

    def _snapshot(self, entity: Any, fields: Sequence[str]) -> Snapshot:
        transform = in_timezone(self._audit.timezone)
        return extract_state(entity, [TrackedField(name, transform) for name in fields])

    def _timestamp(self) -> str:
        return self._audit.now().isoformat()
