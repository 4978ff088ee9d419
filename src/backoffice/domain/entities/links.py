"""Association rows: role→permission, user→role and user→permission overrides."""

from dataclasses import dataclass, field
from datetime import datetime

from backoffice.domain.entities.base import utcnow


@dataclass
class RolePermission:
    """Permission granted to every member of a role. Unique per pair."""

    role_id: int
    permission_id: int
    created_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    permission_name: str | None = None


@dataclass
class UserRole:
    """Role membership. Unique per pair."""

    user_id: int
    role_id: int
    created_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    role_name: str | None = None


@dataclass
class UserPermission:
    """Per-user override: grant when ``is_allowed`` is true, deny otherwise.

    At most one row exists per (user_id, permission_id).
    """

    user_id: int
    permission_id: int
    is_allowed: bool
    created_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    permission_name: str | None = None
