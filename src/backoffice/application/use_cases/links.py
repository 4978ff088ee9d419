"""Validation helpers shared by the association use cases."""

from collections.abc import Sequence
from http import HTTPStatus

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.application.use_cases.base import UseCase
from backoffice.domain.entities import Role, User
from backoffice.domain.exceptions import BusinessRuleError


def unique_ids(ids: Sequence[int]) -> list[int]:
    """Drop duplicates, keep first-seen order."""
    return list(dict.fromkeys(ids))


class LinkUseCase(UseCase):
    error: type[BusinessRuleError] = BusinessRuleError

    def _require_ids(self, ids: Sequence[int], noun: str) -> list[int]:
        if not ids:
            raise self.error(f"At least one {noun} ID is required")
        return unique_ids(ids)

    async def _require_role(self, uow: UnitOfWork, role_id: int) -> Role:
        role = await uow.roles.get_by_id(role_id)
        if role is None:
            raise self.error(f"Role with ID {role_id} not found.", HTTPStatus.NOT_FOUND)
        return role

    async def _require_user(self, uow: UnitOfWork, user_id: int) -> User:
        user = await uow.users.get_by_id(user_id)
        if user is None:
            raise self.error(f"User with ID {user_id} not found.", HTTPStatus.NOT_FOUND)
        return user

    async def _require_permissions(self, uow: UnitOfWork, permission_ids: list[int]) -> None:
        found = await uow.permissions.get_by_ids(permission_ids)
        active = {p.id for p in found if not p.is_archived}
        missing = [pid for pid in permission_ids if pid not in active]
        if missing:
            raise self.error(
                f"Permissions not found or archived: {', '.join(map(str, missing))}",
                HTTPStatus.NOT_FOUND,
            )

    async def _require_roles(self, uow: UnitOfWork, role_ids: list[int]) -> None:
        found = await uow.roles.get_by_ids(role_ids)
        active = {r.id for r in found if not r.is_archived}
        missing = [rid for rid in role_ids if rid not in active]
        if missing:
            raise self.error(
                f"Roles not found or archived: {', '.join(map(str, missing))}",
                HTTPStatus.NOT_FOUND,
            )
