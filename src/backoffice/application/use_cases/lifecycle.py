"""Generic read, update, archive and restore for archivable aggregates.

Each aggregate subclasses these with its ``Aggregate`` description, so the
validate / mutate / re-read / diff / log shape lives in one place.
"""

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.services.change_tracker import diff
from backoffice.application.use_cases.base import Aggregate, UseCase
from backoffice.domain.value_objects import PermissionAction, RequestInfo


class AggregateUseCase(UseCase):
    aggregate: ClassVar[Aggregate]

    async def _load(self, uow: UnitOfWork, entity_id: int) -> Any:
        entity = await self.aggregate.repo(uow).get_by_id(entity_id)
        if entity is None:
            raise self.aggregate.error(
                f"{self.aggregate.label} with ID {entity_id} not found.",
                HTTPStatus.NOT_FOUND,
            )
        return entity


class GetEntityUseCase(AggregateUseCase):
    async def execute(self, entity_id: int, request_info: RequestInfo) -> Any:
        async def work(uow: UnitOfWork) -> Any:
            await self._authorize(
                uow, request_info, self.aggregate.permission(PermissionAction.READ)
            )
            return await self._load(uow, entity_id)

        return await self._transactions.execute(
            f"GET_{self.aggregate.label.upper()}", work
        )


class ListEntitiesUseCase(AggregateUseCase):
    async def execute(self, query: PageQuery, request_info: RequestInfo) -> Page[Any]:
        async def work(uow: UnitOfWork) -> Page[Any]:
            await self._authorize(
                uow,
                request_info,
                self.aggregate.permission(PermissionAction.PAGINATED_LIST),
            )
            return await self.aggregate.repo(uow).list_page(query)

        return await self._transactions.execute(
            f"PAGINATED_LIST_{self.aggregate.label.upper()}", work
        )


class ComboboxUseCase(AggregateUseCase):
    """Active (non-archived) entries for selection lists."""

    async def execute(self, request_info: RequestInfo) -> list[Any]:
        async def work(uow: UnitOfWork) -> list[Any]:
            await self._authorize(
                uow, request_info, self.aggregate.permission(PermissionAction.COMBOBOX)
            )
            return await self.aggregate.repo(uow).list_active()

        return await self._transactions.execute(
            f"COMBOBOX_{self.aggregate.label.upper()}", work
        )


class UpdateEntityUseCase(AggregateUseCase):
    async def execute(
        self,
        entity_id: int,
        changes: Mapping[str, Any],
        request_info: RequestInfo,
    ) -> Any:
        aggregate = self.aggregate

        async def work(uow: UnitOfWork) -> Any:
            await self._authorize(
                uow, request_info, aggregate.permission(PermissionAction.UPDATE)
            )
            entity = await self._load(uow, entity_id)
            before = self._snapshot(entity, aggregate.tracked_fields)

            entity.update(changes, request_info.actor)
            await aggregate.repo(uow).update(entity)

            updated = await self._load(uow, entity_id)
            after = self._snapshot(updated, aggregate.tracked_fields)
            await self._audit.record(
                uow,
                aggregate.update_action,
                aggregate.entity,
                {
                    "id": entity_id,
                    "changed_fields": diff(before, after),
                    "updated_by": request_info.actor,
                    "updated_at": self._timestamp(),
                },
                request_info,
            )
            return updated

        return await self._transactions.execute(str(aggregate.update_action), work)


class ArchiveEntityUseCase(AggregateUseCase):
    async def execute(self, entity_id: int, request_info: RequestInfo) -> Any:
        aggregate = self.aggregate

        async def work(uow: UnitOfWork) -> Any:
            await self._authorize(
                uow, request_info, aggregate.permission(PermissionAction.ARCHIVE)
            )
            entity = await self._load(uow, entity_id)
            before = self._snapshot(entity, ("deleted_at", "deleted_by"))

            entity.archive(request_info.actor)
            await aggregate.repo(uow).update(entity)

            archived = await self._load(uow, entity_id)
            after = self._snapshot(archived, ("deleted_at", "deleted_by"))
            await self._audit.record(
                uow,
                aggregate.archive_action,
                aggregate.entity,
                {
                    "id": entity_id,
                    "explanation": f"{aggregate.label} archived by {request_info.actor}",
                    "changed_fields": diff(before, after),
                    "archived_by": request_info.actor,
                    "archived_at": self._timestamp(),
                },
                request_info,
            )
            return archived

        return await self._transactions.execute(str(aggregate.archive_action), work)


class RestoreEntityUseCase(AggregateUseCase):
    async def execute(self, entity_id: int, request_info: RequestInfo) -> Any:
        aggregate = self.aggregate

        async def work(uow: UnitOfWork) -> Any:
            await self._authorize(
                uow, request_info, aggregate.permission(PermissionAction.RESTORE)
            )
            entity = await self._load(uow, entity_id)
            before = self._snapshot(entity, ("deleted_at", "deleted_by"))

            entity.restore(request_info.actor)
            await aggregate.repo(uow).update(entity)

            restored = await self._load(uow, entity_id)
            after = self._snapshot(restored, ("deleted_at", "deleted_by"))
            await self._audit.record(
                uow,
                aggregate.restore_action,
                aggregate.entity,
                {
                    "id": entity_id,
                    "explanation": f"{aggregate.label} restored by {request_info.actor}",
                    "changed_fields": diff(before, after),
                    "restored_by": request_info.actor,
                    "restored_at": self._timestamp(),
                },
                request_info,
            )
            return restored

        return await self._transactions.execute(str(aggregate.restore_action), work)
