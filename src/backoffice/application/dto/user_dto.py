"""User, user-role and user-permission DTOs."""

from dataclasses import dataclass, field
from datetime import date

from backoffice.domain.entities import UserPermission, UserRole


@dataclass
class UserCreateInput:
    """Input for creating a user. ``password`` is plain text until hashed."""

    username: str
    email: str
    password: str
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    is_active: bool = True


@dataclass
class UserRolesInput:
    """Roles to assign to, or remove from, a user (empty removal means all)."""

    user_id: int
    role_ids: list[int] = field(default_factory=list)
    replace: bool = False


@dataclass
class UserPermissionsInput:
    """Permission overrides to grant, deny or remove for a user."""

    user_id: int
    permission_ids: list[int] = field(default_factory=list)
    replace: bool = False


@dataclass
class UserRolesOutput:
    user_id: int
    roles: list[UserRole]


@dataclass
class UserPermissionsOutput:
    """Overrides of a user plus the resulting effective permission names."""

    user_id: int
    overrides: list[UserPermission]
    effective: list[str]
