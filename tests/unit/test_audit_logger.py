"""Unit tests for the audit logger and payload serialization."""

import logging
from datetime import UTC, date, datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest

from backoffice.application.services.audit_logger import AuditLogger, serialize_payload
from backoffice.domain.entities import ActivityLog
from backoffice.domain.exceptions import ActivityLogBusinessError
from backoffice.domain.value_objects import AuditAction, AuditEntity, RequestInfo
from backoffice.infrastructure.persistence.postgres.activity_log_repository import (
    PostgresActivityLogRepository,
)
from tests.conftest import FakeDatabase, FakeUnitOfWork


def test_json_string_is_parsed() -> None:
    """A string holding JSON is stored as the decoded value."""
    assert serialize_payload('{"id": 5, "tags": ["a"]}') == {"id": 5, "tags": ["a"]}


def test_malformed_json_is_wrapped_as_raw(caplog) -> None:
    """A non-JSON string is kept under ``raw`` and a warning is logged."""
    with caplog.at_level(logging.WARNING):
        assert serialize_payload("not json {") == {"raw": "not json {"}
    assert "Malformed JSON in details" in caplog.text


def test_unserializable_value_is_wrapped_as_raw(caplog) -> None:
    """Objects json cannot encode are kept as their repr."""

    class Opaque:
        def __repr__(self) -> str:
            return "<Opaque>"

    with caplog.at_level(logging.WARNING):
        assert serialize_payload({"value": Opaque()}) == {"raw": "{'value': <Opaque>}"}
    assert "Unserializable details" in caplog.text


def test_common_types_are_encoded() -> None:
    """Dates, sets, enums and decimals become plain JSON values."""
    payload = {
        "when": datetime(2024, 1, 1, 8, tzinfo=UTC),
        "day": date(2024, 6, 12),
        "ids": {3, 1},
        "action": AuditAction.CREATE_ROLE,
        "amount": Decimal("1.50"),
    }
    assert serialize_payload(payload) == {
        "when": "2024-01-01T08:00:00+00:00",
        "day": "2024-06-12",
        "ids": [1, 3],
        "action": "CREATE_ROLE",
        "amount": "1.50",
    }


def test_none_stays_none() -> None:
    """Missing details are stored as null."""
    assert serialize_payload(None) is None


@pytest.mark.asyncio
async def test_record_writes_through_callers_unit_of_work() -> None:
    """The log row lives in the caller's transaction until commit."""
    db = FakeDatabase()
    uow = FakeUnitOfWork(db)
    await uow.begin()
    logger = AuditLogger(ZoneInfo("Asia/Manila"))
    info = RequestInfo(user_id=7, user_name="alice", ip_address="10.0.0.9", session_id="s1")

    saved = await logger.record(
        uow, AuditAction.CREATE_ROLE, AuditEntity.ROLES, {"id": 3}, info
    )

    assert saved.id is not None
    assert saved.action == "CREATE_ROLE"
    assert saved.entity == "roles"
    assert saved.details == {"id": 3}
    assert saved.request_info == {
        "user_name": "alice",
        "ip_address": "10.0.0.9",
        "user_agent": None,
        "session_id": "s1",
    }
    assert saved.occurred_at.utcoffset().total_seconds() == 8 * 3600
    assert db.tables.activity_logs == []

    await uow.commit()
    assert len(db.tables.activity_logs) == 1


@pytest.mark.asyncio
async def test_record_failure_propagates() -> None:
    """Audit failures are not swallowed."""
    uow = FakeUnitOfWork(FakeDatabase())
    await uow.begin()
    info = RequestInfo(user_id=1, user_name="alice", user_agent="x" * 501)

    with pytest.raises(ActivityLogBusinessError, match="user_agent"):
        await AuditLogger().record(uow, "CREATE_ROLE", "roles", {}, info)


def test_activity_log_requires_user_name() -> None:
    """request_info must name the acting user."""
    with pytest.raises(ActivityLogBusinessError, match="user_name is required"):
        ActivityLog.create("CREATE_ROLE", "roles", {}, {"user_name": " "})


def test_activity_log_action_length() -> None:
    """Action is limited to 100 characters."""
    with pytest.raises(ActivityLogBusinessError, match="must not exceed 100"):
        ActivityLog.create("A" * 101, "roles", {}, {"user_name": "alice"})


def test_anonymous_request_info_records_system_actor() -> None:
    """Without a user name the actor falls back to ``system``."""
    info = RequestInfo(user_name="")
    assert info.actor == "system"
    assert info.to_audit_dict()["user_name"] == "system"
    assert "user_id" not in info.to_audit_dict()


class RecordingConnection:
    """Captures the INSERT parameters and echoes them back as the stored row."""

    def __init__(self) -> None:
        self.params: tuple | None = None

    async def execute(self, query, params=None):
        self.params = params
        action, entity, details, employee_id, occurred_at, request_info = params
        row = {
            "id": 1,
            "action": action,
            "entity": entity,
            "details": details.obj if details is not None else None,
            "employee_id": employee_id,
            "occurred_at": occurred_at,
            "request_info": request_info.obj,
        }
        return SimpleNamespace(fetchone=AsyncMock(return_value=row))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("details", "stored"),
    [
        ('"archived"', "archived"),
        ('{"id": 5}', {"id": 5}),
        ("not json {", {"raw": "not json {"}),
    ],
)
async def test_postgres_repository_stores_serialized_details_once(details, stored) -> None:
    """Details reach the jsonb column exactly as the logger serialized them."""
    conn = RecordingConnection()
    uow = SimpleNamespace(activity_logs=PostgresActivityLogRepository(conn))

    saved = await AuditLogger(UTC).record(
        uow, AuditAction.ARCHIVE_ROLE, AuditEntity.ROLES, details, RequestInfo(user_name="admin")
    )

    assert conn.params[2].obj == stored
    assert conn.params[5].obj["user_name"] == "admin"
    assert saved.details == stored
