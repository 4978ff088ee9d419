"""User read, update, archive and restore use cases."""

from backoffice.application.use_cases.base import Aggregate
from backoffice.application.use_cases.lifecycle import (
    ArchiveEntityUseCase,
    ComboboxUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    RestoreEntityUseCase,
    UpdateEntityUseCase,
)
from backoffice.domain.exceptions import UserBusinessError
from backoffice.domain.value_objects import AuditAction, AuditEntity, PermissionResource

USER = Aggregate(
    label="User",
    repository="users",
    resource=PermissionResource.USERS,
    entity=AuditEntity.USERS,
    error=UserBusinessError,
    tracked_fields=(
        "username",
        "email",
        "first_name",
        "middle_name",
        "last_name",
        "phone",
        "date_of_birth",
        "is_active",
        "is_email_verified",
    ),
    create_action=AuditAction.CREATE_USER,
    update_action=AuditAction.UPDATE_USER,
    archive_action=AuditAction.ARCHIVE_USER,
    restore_action=AuditAction.RESTORE_USER,
)


class GetUserUseCase(GetEntityUseCase):
    aggregate = USER


class ListUsersUseCase(ListEntitiesUseCase):
    aggregate = USER


class UserComboboxUseCase(ComboboxUseCase):
    aggregate = USER


class UpdateUserUseCase(UpdateEntityUseCase):
    """Profile update. The username is immutable."""

    aggregate = USER


class ArchiveUserUseCase(ArchiveEntityUseCase):
    """Archived users can no longer authenticate."""

    aggregate = USER


class RestoreUserUseCase(RestoreEntityUseCase):
    aggregate = USER
