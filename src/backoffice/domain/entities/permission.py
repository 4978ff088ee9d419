"""Permission entity - one `resource:action` pair of the catalog."""

from dataclasses import dataclass

from backoffice.domain.entities.base import AuditedEntity
from backoffice.domain.exceptions import PermissionBusinessError
from backoffice.domain.value_objects.permission_catalog import permission_name


@dataclass(kw_only=True)
class Permission(AuditedEntity):
    """Permission identified by (resource, action) with a unique name."""

    label = "Permission"
    error = PermissionBusinessError
    updatable_fields = frozenset({"name", "resource", "action", "description"})

    name: str
    resource: str
    action: str
    description: str | None = None

    @classmethod
    def create(
        cls,
        resource: str,
        action: str,
        created_by: str,
        name: str | None = None,
        description: str | None = None,
    ) -> "Permission":
        permission = cls(
            name=name or permission_name(resource, action),
            resource=resource,
            action=action,
            description=description,
            created_by=created_by,
            updated_by=created_by,
        )
        permission.validate()
        return permission

    def validate(self) -> None:
        self._check_length("name", self.name, 255, required=True)
        self._check_length("resource", self.resource, 100, required=True)
        self._check_length("action", self.action, 50, required=True)
        self._check_length("description", self.description, 500)
