"""Holiday read, update, archive and restore use cases."""

from backoffice.application.use_cases.base import Aggregate
from backoffice.application.use_cases.lifecycle import (
    ArchiveEntityUseCase,
    ComboboxUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    RestoreEntityUseCase,
    UpdateEntityUseCase,
)
from backoffice.domain.exceptions import HolidayBusinessError
from backoffice.domain.value_objects import AuditAction, AuditEntity, PermissionResource

HOLIDAY = Aggregate(
    label="Holiday",
    repository="holidays",
    resource=PermissionResource.HOLIDAYS,
    entity=AuditEntity.HOLIDAYS,
    error=HolidayBusinessError,
    tracked_fields=("name", "date", "type", "description", "is_recurring"),
    create_action=AuditAction.CREATE_HOLIDAY,
    update_action=AuditAction.UPDATE_HOLIDAY,
    archive_action=AuditAction.ARCHIVE_HOLIDAY,
    restore_action=AuditAction.RESTORE_HOLIDAY,
)


class GetHolidayUseCase(GetEntityUseCase):
    aggregate = HOLIDAY


class ListHolidaysUseCase(ListEntitiesUseCase):
    aggregate = HOLIDAY


class HolidayComboboxUseCase(ComboboxUseCase):
    aggregate = HOLIDAY


class UpdateHolidayUseCase(UpdateEntityUseCase):
    aggregate = HOLIDAY


class ArchiveHolidayUseCase(ArchiveEntityUseCase):
    aggregate = HOLIDAY


class RestoreHolidayUseCase(RestoreEntityUseCase):
    aggregate = HOLIDAY
