"""Create holiday use case."""

from backoffice.application.dto.holiday_dto import HolidayCreateInput
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.base import UseCase
from backoffice.application.use_cases.holiday.holiday_lifecycle import HOLIDAY
from backoffice.domain.entities import Holiday
from backoffice.domain.value_objects import PermissionAction, RequestInfo


class CreateHolidayUseCase(UseCase):
    async def execute(self, data: HolidayCreateInput, request_info: RequestInfo) -> Holiday:
        async def work(uow: UnitOfWork) -> Holiday:
            await self._authorize(uow, request_info, HOLIDAY.permission(PermissionAction.CREATE))
            holiday = Holiday.create(
                name=data.name,
                date=data.date,
                type=data.type,
                description=data.description,
                is_recurring=data.is_recurring,
                created_by=request_info.actor,
            )
            created = await uow.holidays.add(holiday)
            await self._audit.record(
                uow,
                HOLIDAY.create_action,
                HOLIDAY.entity,
                {
                    "id": created.id,
                    "created": self._snapshot(created, HOLIDAY.tracked_fields),
                    "created_by": request_info.actor,
                    "created_at": self._timestamp(),
                },
                request_info,
            )
            return created

        return await self._transactions.execute(str(HOLIDAY.create_action), work)
