"""Read-only access to the activity log."""

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.base import UseCase
from backoffice.domain.entities import ActivityLog
from backoffice.domain.exceptions import ActivityLogBusinessError
from backoffice.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    RequestInfo,
    permission_name,
)


class ListActivityLogsUseCase(UseCase):
    """Newest first; filter by entity or by action, not both."""

    async def execute(
        self,
        request_info: RequestInfo,
        entity: str | None = None,
        action: str | None = None,
        limit: int | None = None,
    ) -> list[ActivityLog]:
        if entity and action:
            raise ActivityLogBusinessError("Filter by entity or by action, not both")

        async def work(uow: UnitOfWork) -> list[ActivityLog]:
            await self._authorize(
                uow,
                request_info,
                permission_name(PermissionResource.ACTIVITY_LOGS, PermissionAction.READ),
            )
            if entity:
                return await uow.activity_logs.list_by_entity(entity, limit)
            if action:
                return await uow.activity_logs.list_by_action(action, limit)
            return await uow.activity_logs.list_all(limit)

        return await self._transactions.execute("LIST_ACTIVITY_LOGS", work)
