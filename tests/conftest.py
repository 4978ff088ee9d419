"""Pytest fixtures for back office tests."""

from __future__ import annotations

import copy
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC
from typing import Any

import pytest

from backoffice.application.dto.pagination import Page, PageQuery
from backoffice.application.services.audit_logger import AuditLogger
from backoffice.domain.entities import (
    ActivityLog,
    AuditedEntity,
    Holiday,
    Permission,
    Role,
    RolePermission,
    User,
    UserPermission,
    UserRole,
)
from backoffice.domain.value_objects import (
    PermissionAction,
    PermissionResource,
    RequestInfo,
)
from backoffice.infrastructure.permission.permission_checker import RbacPermissionChecker
from backoffice.infrastructure.persistence.transaction_executor import UnitOfWorkExecutor


# --- In-memory storage ---


@dataclass
class FakeTables:
    roles: dict[int, Role] = field(default_factory=dict)
    permissions: dict[int, Permission] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    holidays: dict[int, Holiday] = field(default_factory=dict)
    role_permissions: dict[tuple[int, int], RolePermission] = field(default_factory=dict)
    user_roles: dict[tuple[int, int], UserRole] = field(default_factory=dict)
    user_permissions: dict[tuple[int, int], UserPermission] = field(default_factory=dict)
    activity_logs: list[ActivityLog] = field(default_factory=list)
    next_id: int = 1

    def allocate_id(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value


class FakeDatabase:
    """Committed state. Each unit of work edits a private copy of it."""

    def __init__(self) -> None:
        self.tables = FakeTables()
        self.commits = 0
        self.rollbacks = 0


# --- Fake repositories ---


class FakeArchivableRepository:
    """In-memory repository for one archivable aggregate table."""

    table: str = ""
    search_fields: tuple[str, ...] = ("name",)

    def __init__(self, tables: FakeTables, failures: dict[str, BaseException]) -> None:
        self._tables = tables
        self._failures = failures

    def _maybe_fail(self, operation: str) -> None:
        failure = self._failures.get(f"{self.table}.{operation}")
        if failure is not None:
            raise failure

    @property
    def _rows(self) -> dict[int, Any]:
        return getattr(self._tables, self.table)

    async def get_by_id(self, entity_id: int) -> Any:
        row = self._rows.get(entity_id)
        return copy.deepcopy(row)

    async def get_by_ids(self, ids: list[int]) -> list[Any]:
        return [copy.deepcopy(self._rows[i]) for i in ids if i in self._rows]

    async def add(self, entity: AuditedEntity) -> Any:
        self._maybe_fail("add")
        stored = copy.deepcopy(entity)
        stored.id = self._tables.allocate_id()
        self._rows[stored.id] = stored
        return copy.deepcopy(stored)

    async def update(self, entity: AuditedEntity) -> None:
        self._maybe_fail("update")
        self._rows[entity.id] = copy.deepcopy(entity)

    async def list_page(self, query: PageQuery) -> Page[Any]:
        rows = sorted(self._rows.values(), key=lambda r: r.id)
        if not query.include_archived:
            rows = [r for r in rows if not r.is_archived]
        if query.cursor is not None:
            rows = [r for r in rows if r.id > query.cursor]
        if query.search:
            needle = query.search.lower()
            rows = [
                r
                for r in rows
                if any(needle in str(getattr(r, f) or "").lower() for f in self.search_fields)
            ]
        items = rows[: query.limit]
        next_cursor = items[-1].id if len(rows) > query.limit else None
        return Page(items=copy.deepcopy(items), next_cursor=next_cursor)

    async def list_active(self) -> list[Any]:
        rows = sorted(self._rows.values(), key=lambda r: r.id)
        return [copy.deepcopy(r) for r in rows if not r.is_archived]

    async def get_by_name(self, name: str) -> Any:
        for row in self._rows.values():
            if row.name == name:
                return copy.deepcopy(row)
        return None


class FakeRoleRepository(FakeArchivableRepository):
    table = "roles"
    search_fields = ("name", "description")


class FakePermissionRepository(FakeArchivableRepository):
    table = "permissions"
    search_fields = ("name", "resource", "action", "description")

    async def get_by_names(self, names: list[str]) -> list[Permission]:
        wanted = set(names)
        return [copy.deepcopy(p) for p in self._rows.values() if p.name in wanted]


class FakeUserRepository(FakeArchivableRepository):
    table = "users"
    search_fields = ("username", "email", "first_name", "last_name")

    async def get_by_username(self, username: str) -> User | None:
        for user in self._rows.values():
            if user.username == username:
                return copy.deepcopy(user)
        return None

    async def get_by_email(self, email: str) -> User | None:
        for user in self._rows.values():
            if user.email == email:
                return copy.deepcopy(user)
        return None


class FakeHolidayRepository(FakeArchivableRepository):
    table = "holidays"
    search_fields = ("name", "type", "description")


class FakeRolePermissionRepository:
    def __init__(self, tables: FakeTables) -> None:
        self._tables = tables

    async def list_by_role(self, role_id: int) -> list[RolePermission]:
        links = [
            copy.deepcopy(link)
            for (rid, _), link in sorted(self._tables.role_permissions.items())
            if rid == role_id
        ]
        for link in links:
            link.permission_name = self._tables.permissions[link.permission_id].name
        return links

    async def permission_ids_for_roles(self, role_ids: Sequence[int]) -> set[int]:
        wanted = set(role_ids)
        return {
            pid
            for (rid, pid) in self._tables.role_permissions
            if rid in wanted
            and not self._tables.roles[rid].is_archived
            and not self._tables.permissions[pid].is_archived
        }

    async def add_many(
        self, role_id: int, permission_ids: Sequence[int], created_by: str
    ) -> None:
        for pid in permission_ids:
            self._tables.role_permissions.setdefault(
                (role_id, pid),
                RolePermission(role_id=role_id, permission_id=pid, created_by=created_by),
            )

    async def remove(self, role_id: int, permission_ids: Sequence[int] = ()) -> int:
        keys = [
            key
            for key in self._tables.role_permissions
            if key[0] == role_id and (not permission_ids or key[1] in permission_ids)
        ]
        for key in keys:
            del self._tables.role_permissions[key]
        return len(keys)


class FakeUserRoleRepository:
    def __init__(self, tables: FakeTables) -> None:
        self._tables = tables

    async def list_by_user(self, user_id: int) -> list[UserRole]:
        links = [
            copy.deepcopy(link)
            for (uid, _), link in sorted(self._tables.user_roles.items())
            if uid == user_id
        ]
        for link in links:
            link.role_name = self._tables.roles[link.role_id].name
        return links

    async def role_ids_for_user(self, user_id: int) -> set[int]:
        return {
            rid
            for (uid, rid) in self._tables.user_roles
            if uid == user_id and not self._tables.roles[rid].is_archived
        }

    async def add_many(self, user_id: int, role_ids: Sequence[int], created_by: str) -> None:
        for rid in role_ids:
            self._tables.user_roles.setdefault(
                (user_id, rid), UserRole(user_id=user_id, role_id=rid, created_by=created_by)
            )

    async def remove(self, user_id: int, role_ids: Sequence[int] = ()) -> int:
        keys = [
            key
            for key in self._tables.user_roles
            if key[0] == user_id and (not role_ids or key[1] in role_ids)
        ]
        for key in keys:
            del self._tables.user_roles[key]
        return len(keys)


class FakeUserPermissionRepository:
    def __init__(self, tables: FakeTables) -> None:
        self._tables = tables

    async def list_by_user(self, user_id: int) -> list[UserPermission]:
        links = [
            copy.deepcopy(link)
            for (uid, _), link in sorted(self._tables.user_permissions.items())
            if uid == user_id
        ]
        for link in links:
            link.permission_name = self._tables.permissions[link.permission_id].name
        return links

    async def upsert_many(
        self,
        user_id: int,
        permission_ids: Sequence[int],
        is_allowed: bool,
        created_by: str,
    ) -> None:
        for pid in permission_ids:
            existing = self._tables.user_permissions.get((user_id, pid))
            if existing is not None:
                existing.is_allowed = is_allowed
            else:
                self._tables.user_permissions[(user_id, pid)] = UserPermission(
                    user_id=user_id,
                    permission_id=pid,
                    is_allowed=is_allowed,
                    created_by=created_by,
                )

    async def remove(self, user_id: int, permission_ids: Sequence[int] = ()) -> int:
        keys = [
            key
            for key in self._tables.user_permissions
            if key[0] == user_id and (not permission_ids or key[1] in permission_ids)
        ]
        for key in keys:
            del self._tables.user_permissions[key]
        return len(keys)


class FakeActivityLogRepository:
    def __init__(self, tables: FakeTables, failures: dict[str, BaseException]) -> None:
        self._tables = tables
        self._failures = failures

    async def add(self, log: ActivityLog) -> ActivityLog:
        failure = self._failures.get("activity_logs.add")
        if failure is not None:
            raise failure
        stored = ActivityLog(
            action=log.action,
            entity=log.entity,
            details=copy.deepcopy(log.details),
            request_info=dict(log.request_info),
            occurred_at=log.occurred_at,
            employee_id=log.employee_id,
            id=self._tables.allocate_id(),
        )
        self._tables.activity_logs.append(stored)
        return stored

    def _newest_first(self, logs: list[ActivityLog], limit: int | None) -> list[ActivityLog]:
        ordered = sorted(logs, key=lambda log: (log.occurred_at, log.id), reverse=True)
        return ordered[:limit] if limit else ordered

    async def list_all(self, limit: int | None = None) -> list[ActivityLog]:
        return self._newest_first(self._tables.activity_logs, limit)

    async def list_by_entity(self, entity: str, limit: int | None = None) -> list[ActivityLog]:
        return self._newest_first(
            [log for log in self._tables.activity_logs if log.entity == entity], limit
        )

    async def list_by_action(self, action: str, limit: int | None = None) -> list[ActivityLog]:
        return self._newest_first(
            [log for log in self._tables.activity_logs if log.action == action], limit
        )


# --- Unit of work ---


class FakeUnitOfWork:
    """Unit of work over ``FakeDatabase`` with real commit/rollback semantics.

    ``begin`` copies the committed tables; ``commit`` publishes the copy and
    ``rollback`` drops it. The ``fail_on_*`` hooks and ``failures`` (keyed
    ``"<table>.<operation>"``, e.g. ``"roles.update"``) inject failures.
    """

    def __init__(
        self, db: FakeDatabase, failures: dict[str, BaseException] | None = None
    ) -> None:
        self._db = db
        self._failures = failures if failures is not None else {}
        self._tables: FakeTables | None = None
        self.began = False
        self.committed = False
        self.rolled_back = False
        self.release_calls: list[BaseException | None] = []
        self.fail_on_commit: BaseException | None = None
        self.fail_on_rollback: BaseException | None = None
        self.fail_on_release: BaseException | None = None

    def _bound(self) -> FakeTables:
        if self._tables is None:
            raise RuntimeError("Unit of work used outside a transaction")
        return self._tables

    @property
    def roles(self) -> FakeRoleRepository:
        return FakeRoleRepository(self._bound(), self._failures)

    @property
    def permissions(self) -> FakePermissionRepository:
        return FakePermissionRepository(self._bound(), self._failures)

    @property
    def users(self) -> FakeUserRepository:
        return FakeUserRepository(self._bound(), self._failures)

    @property
    def holidays(self) -> FakeHolidayRepository:
        return FakeHolidayRepository(self._bound(), self._failures)

    @property
    def role_permissions(self) -> FakeRolePermissionRepository:
        return FakeRolePermissionRepository(self._bound())

    @property
    def user_roles(self) -> FakeUserRoleRepository:
        return FakeUserRoleRepository(self._bound())

    @property
    def user_permissions(self) -> FakeUserPermissionRepository:
        return FakeUserPermissionRepository(self._bound())

    @property
    def activity_logs(self) -> FakeActivityLogRepository:
        return FakeActivityLogRepository(self._bound(), self._failures)

    @property
    def in_transaction(self) -> bool:
        return self._tables is not None

    async def begin(self) -> None:
        self.began = True
        self._tables = copy.deepcopy(self._db.tables)

    async def commit(self) -> None:
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self._db.tables = self._bound()
        self._db.commits += 1
        self.committed = True
        self._tables = None

    async def rollback(self) -> None:
        if self.fail_on_rollback is not None:
            raise self.fail_on_rollback
        self._db.rollbacks += 1
        self.rolled_back = True
        self._tables = None

    async def release(self, exc: BaseException | None = None) -> None:
        self.release_calls.append(exc)
        if self.fail_on_release is not None:
            raise self.fail_on_release


class FakeUnitOfWorkProvider:
    """Callable provider that remembers every unit of work it handed out."""

    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.created: list[FakeUnitOfWork] = []
        self.failures: dict[str, BaseException] = {}

    def __call__(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork(self.db, self.failures)
        self.created.append(uow)
        return uow

    @property
    def last(self) -> FakeUnitOfWork:
        return self.created[-1]


# --- Seed helpers ---


def seed_permission(tables: FakeTables, resource: str, action: str) -> Permission:
    permission = Permission.create(resource, action, created_by="seed")
    permission.id = tables.allocate_id()
    tables.permissions[permission.id] = permission
    return permission


def seed_role(tables: FakeTables, name: str, permissions: Sequence[Permission] = ()) -> Role:
    role = Role.create(name, None, created_by="seed")
    role.id = tables.allocate_id()
    tables.roles[role.id] = role
    for permission in permissions:
        tables.role_permissions[(role.id, permission.id)] = RolePermission(
            role_id=role.id, permission_id=permission.id, created_by="seed"
        )
    return role


def seed_user(tables: FakeTables, username: str, roles: Sequence[Role] = ()) -> User:
    user = User.create(username, f"{username}@example.com", "hashed", created_by="seed")
    user.id = tables.allocate_id()
    tables.users[user.id] = user
    for role in roles:
        tables.user_roles[(user.id, role.id)] = UserRole(
            user_id=user.id, role_id=role.id, created_by="seed"
        )
    return user


def seed_override(
    tables: FakeTables, user: User, permission: Permission, is_allowed: bool
) -> None:
    tables.user_permissions[(user.id, permission.id)] = UserPermission(
        user_id=user.id, permission_id=permission.id, is_allowed=is_allowed, created_by="seed"
    )


@dataclass
class SeededCatalog:
    permissions: dict[str, Permission]
    admin_role: Role
    admin: User


def seed_catalog(db: FakeDatabase) -> SeededCatalog:
    """Every resource:action pair, an Admin role holding all of them, and an admin user."""
    tables = db.tables
    permissions = {}
    for resource in PermissionResource:
        for action in PermissionAction:
            permission = seed_permission(tables, resource, action)
            permissions[permission.name] = permission
    admin_role = seed_role(tables, "Admin", list(permissions.values()))
    admin = seed_user(tables, "admin", [admin_role])
    return SeededCatalog(permissions=permissions, admin_role=admin_role, admin=admin)


# --- Fixtures ---


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def uow_provider(fake_db: FakeDatabase) -> FakeUnitOfWorkProvider:
    return FakeUnitOfWorkProvider(fake_db)


@pytest.fixture
def executor(uow_provider: FakeUnitOfWorkProvider) -> UnitOfWorkExecutor:
    return UnitOfWorkExecutor(uow_provider)


@pytest.fixture
def permission_checker(executor: UnitOfWorkExecutor) -> RbacPermissionChecker:
    return RbacPermissionChecker(executor)


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger(UTC)


@pytest.fixture
def catalog(fake_db: FakeDatabase) -> SeededCatalog:
    return seed_catalog(fake_db)


@pytest.fixture
def admin_info(catalog: SeededCatalog) -> RequestInfo:
    return RequestInfo(
        user_id=catalog.admin.id,
        user_name=catalog.admin.username,
        ip_address="10.0.0.1",
        user_agent="pytest",
        session_id="sess-1",
    )


@pytest.fixture
def deps(
    executor: UnitOfWorkExecutor,
    permission_checker: RbacPermissionChecker,
    audit_logger: AuditLogger,
) -> tuple[UnitOfWorkExecutor, RbacPermissionChecker, AuditLogger]:
    """Constructor arguments shared by every use case."""
    return executor, permission_checker, audit_logger


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows everything by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.has_any_permission.return_value = True
    mock.effective_permissions.return_value = set()
    return mock


@pytest.fixture
def plain_hasher():
    """Reversible stand-in for bcrypt so tests stay fast."""

    class _Hasher:
        def hash(self, password: str) -> str:
            return f"hashed:{password}"

        def verify(self, password: str, hashed: str) -> bool:
            return hashed == f"hashed:{password}"

    return _Hasher()
