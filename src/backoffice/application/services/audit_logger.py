"""Audit logger - writes activity log rows on the caller's transaction."""

import json
import logging
from datetime import UTC, date, datetime, tzinfo
from decimal import Decimal
from enum import Enum
from typing import Any

from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.domain.entities import ActivityLog
from backoffice.domain.entities.base import utcnow
from backoffice.domain.value_objects import RequestInfo

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, set | frozenset):
        return sorted(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(value: Any, field_name: str = "details") -> Any:
    """Turn ``value`` into plain JSON data without losing information.

    A string is parsed as JSON. When the string is not JSON, or the value
    cannot be encoded, it is kept as ``{"raw": value}``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Malformed JSON in %s, storing it under 'raw'", field_name)
            return {"raw": value}
    try:
        return json.loads(json.dumps(value, default=_json_default))
    except (TypeError, ValueError):
        logger.warning(
            "Unserializable %s of type %s, storing it under 'raw'",
            field_name,
            type(value).__name__,
        )
        return {"raw": repr(value)}


class AuditLogger:
    """Records one immutable activity log entry per mutation.

    The row is written through ``uow`` so it commits or rolls back together
    with the business change. Failures are never caught here.
    """

    def __init__(self, display_timezone: tzinfo = UTC) -> None:
        self._tz = display_timezone

    @property
    def timezone(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return utcnow().astimezone(self._tz)

    async def record(
        self,
        uow: UnitOfWork,
        action: str,
        entity: str,
        details: Any,
        request_info: RequestInfo,
        employee_id: int | None = None,
    ) -> ActivityLog:
        log = ActivityLog.create(
            action=str(action),
            entity=str(entity),
            details=serialize_payload(details),
            request_info=serialize_payload(request_info.to_audit_dict(), "request_info"),
            employee_id=employee_id,
            occurred_at=self.now(),
        )
        saved = await uow.activity_logs.add(log)
        logger.debug("Recorded %s on %s by %s", log.action, log.entity, request_info.actor)
        return saved
