"""Effective permission computation.

Deny overrides always win: ``effective = (base ∪ granted) \\ denied``.
"""

from collections.abc import Iterable

from backoffice.domain.entities.links import UserPermission
from backoffice.domain.value_objects.decision import Decision


def effective_permission_ids(
    role_permission_ids: Iterable[int],
    overrides: Iterable[UserPermission],
) -> frozenset[int]:
    """Combine role-derived permissions with per-user grant/deny overrides."""
    base = set(role_permission_ids)
    granted: set[int] = set()
    denied: set[int] = set()
    for override in overrides:
        (granted if override.is_allowed else denied).add(override.permission_id)
    return frozenset((base | granted) - denied)


def decide(permission_id: int | None, effective: Iterable[int]) -> Decision:
    if permission_id is not None and permission_id in set(effective):
        return Decision.ALLOWED
    return Decision.DENIED
