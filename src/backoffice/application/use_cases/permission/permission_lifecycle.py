"""Permission read, update, archive and restore use cases."""

from backoffice.application.use_cases.base import Aggregate
from backoffice.application.use_cases.lifecycle import (
    ArchiveEntityUseCase,
    ComboboxUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    RestoreEntityUseCase,
    UpdateEntityUseCase,
)
from backoffice.domain.exceptions import PermissionBusinessError
from backoffice.domain.value_objects import AuditAction, AuditEntity, PermissionResource

PERMISSION = Aggregate(
    label="Permission",
    repository="permissions",
    resource=PermissionResource.PERMISSIONS,
    entity=AuditEntity.PERMISSIONS,
    error=PermissionBusinessError,
    tracked_fields=("name", "resource", "action", "description"),
    create_action=AuditAction.CREATE_PERMISSION,
    update_action=AuditAction.UPDATE_PERMISSION,
    archive_action=AuditAction.ARCHIVE_PERMISSION,
    restore_action=AuditAction.RESTORE_PERMISSION,
)


class GetPermissionUseCase(GetEntityUseCase):
    aggregate = PERMISSION


class ListPermissionsUseCase(ListEntitiesUseCase):
    aggregate = PERMISSION


class PermissionComboboxUseCase(ComboboxUseCase):
    aggregate = PERMISSION


class UpdatePermissionUseCase(UpdateEntityUseCase):
    aggregate = PERMISSION


class ArchivePermissionUseCase(ArchiveEntityUseCase):
    """Archived permissions stop counting in every effective permission set."""

    aggregate = PERMISSION


class RestorePermissionUseCase(RestoreEntityUseCase):
    aggregate = PERMISSION
