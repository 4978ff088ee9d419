"""Role entity for RBAC."""

from dataclasses import dataclass

from backoffice.domain.entities.base import AuditedEntity
from backoffice.domain.exceptions import RoleBusinessError


@dataclass(kw_only=True)
class Role(AuditedEntity):
    """Named set of permissions, e.g. Admin, Editor, Viewer."""

    label = "Role"
    error = RoleBusinessError
    updatable_fields = frozenset({"name", "description"})

    name: str
    description: str | None = None

    @classmethod
    def create(cls, name: str, description: str | None, created_by: str) -> "Role":
        role = cls(
            name=name.strip(),
            description=description,
            created_by=created_by,
            updated_by=created_by,
        )
        role.validate()
        return role

    def validate(self) -> None:
        self._check_length("name", self.name, 255, min_length=2, required=True)
        self._check_length("description", self.description, 500)
