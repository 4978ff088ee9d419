"""Role and role-permission DTOs."""

from dataclasses import dataclass, field


@dataclass
class RoleCreateInput:
    name: str
    description: str | None = None


@dataclass
class RolePermissionsInput:
    """Permissions to assign to, or remove from, a role.

    For removal an empty list means every permission of the role.
    """

    role_id: int
    permission_ids: list[int] = field(default_factory=list)
    replace: bool = False
