"""Role read, update, archive and restore use cases."""

from backoffice.application.use_cases.base import Aggregate
from backoffice.application.use_cases.lifecycle import (
    ArchiveEntityUseCase,
    ComboboxUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    RestoreEntityUseCase,
    UpdateEntityUseCase,
)
from backoffice.domain.exceptions import RoleBusinessError
from backoffice.domain.value_objects import AuditAction, AuditEntity, PermissionResource

ROLE = Aggregate(
    label="Role",
    repository="roles",
    resource=PermissionResource.ROLES,
    entity=AuditEntity.ROLES,
    error=RoleBusinessError,
    tracked_fields=("name", "description"),
    create_action=AuditAction.CREATE_ROLE,
    update_action=AuditAction.UPDATE_ROLE,
    archive_action=AuditAction.ARCHIVE_ROLE,
    restore_action=AuditAction.RESTORE_ROLE,
)


class GetRoleUseCase(GetEntityUseCase):
    aggregate = ROLE


class ListRolesUseCase(ListEntitiesUseCase):
    aggregate = ROLE


class RoleComboboxUseCase(ComboboxUseCase):
    aggregate = ROLE


class UpdateRoleUseCase(UpdateEntityUseCase):
    """Rename or re-describe a role. Archived roles must be restored first."""

    aggregate = ROLE


class ArchiveRoleUseCase(ArchiveEntityUseCase):
    aggregate = ROLE


class RestoreRoleUseCase(RestoreEntityUseCase):
    aggregate = ROLE
