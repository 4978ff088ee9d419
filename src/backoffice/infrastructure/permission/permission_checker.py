"""Permission checker implementation - roles plus per-user overrides."""

import logging
from collections.abc import Iterable

from backoffice.application.ports.unit_of_work import TransactionExecutor, UnitOfWork
from backoffice.domain.authorization import decide, effective_permission_ids
from backoffice.domain.value_objects import Decision

logger = logging.getLogger(__name__)


class RbacPermissionChecker:
    """Resolves permissions from role membership and grant/deny overrides.

    Reads only. Unknown users, unknown or archived permissions and empty
    role sets all resolve to ``Decision.DENIED``.
    """

    def __init__(self, transaction_executor: TransactionExecutor | None = None) -> None:
        self._transactions = transaction_executor

    async def _effective_ids(self, uow: UnitOfWork, user_id: int) -> frozenset[int]:
        role_ids = await uow.user_roles.role_ids_for_user(user_id)
        base = await uow.role_permissions.permission_ids_for_roles(sorted(role_ids))
        overrides = await uow.user_permissions.list_by_user(user_id)
        return effective_permission_ids(base, overrides)

    async def _active_permission_ids(self, uow: UnitOfWork, names: Iterable[str]) -> dict[str, int]:
        permissions = await uow.permissions.get_by_names(list(dict.fromkeys(names)))
        return {p.name: p.id for p in permissions if not p.is_archived and p.id is not None}

    async def resolve(self, uow: UnitOfWork, user_id: int | None, permission: str) -> Decision:
        if user_id is None:
            return Decision.DENIED
        known = await self._active_permission_ids(uow, [permission])
        if permission not in known:
            logger.debug("Permission %s unknown or archived", permission)
            return Decision.DENIED
        effective = await self._effective_ids(uow, user_id)
        return decide(known[permission], effective)

    async def has_any_permission(
        self, uow: UnitOfWork, user_id: int | None, permissions: Iterable[str]
    ) -> bool:
        names = list(permissions)
        if user_id is None or not names:
            return False
        known = await self._active_permission_ids(uow, names)
        if not known:
            return False
        effective = await self._effective_ids(uow, user_id)
        return any(pid in effective for pid in known.values())

    async def has_all_permissions(
        self, uow: UnitOfWork, user_id: int | None, permissions: Iterable[str]
    ) -> bool:
        names = list(dict.fromkeys(permissions))
        if user_id is None or not names:
            return False
        known = await self._active_permission_ids(uow, names)
        if len(known) != len(names):
            return False
        effective = await self._effective_ids(uow, user_id)
        return all(pid in effective for pid in known.values())

    async def has_role(
        self, uow: UnitOfWork, user_id: int | None, role_names: Iterable[str]
    ) -> bool:
        wanted = set(role_names)
        if user_id is None or not wanted:
            return False
        role_ids = await uow.user_roles.role_ids_for_user(user_id)
        roles = await uow.roles.get_by_ids(sorted(role_ids))
        return any(r.name in wanted and not r.is_archived for r in roles)

    async def effective_permissions(self, uow: UnitOfWork, user_id: int | None) -> set[str]:
        if user_id is None:
            return set()
        effective = await self._effective_ids(uow, user_id)
        permissions = await uow.permissions.get_by_ids(sorted(effective))
        return {p.name for p in permissions if not p.is_archived}

    async def check(self, user_id: int | None, permission: str) -> bool:
        """Standalone check in its own read transaction."""
        if self._transactions is None:
            raise RuntimeError("RbacPermissionChecker.check needs a transaction executor")

        async def work(uow: UnitOfWork) -> Decision:
            return await self.resolve(uow, user_id, permission)

        decision = await self._transactions.execute("RESOLVE_PERMISSION", work)
        return decision.allowed
