"""Activity log entry - immutable audit record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from backoffice.domain.entities.base import utcnow
from backoffice.domain.exceptions import ActivityLogBusinessError

REQUEST_INFO_LIMITS = {
    "user_name": 100,
    "ip_address": 45,
    "user_agent": 500,
    "session_id": 255,
}


@dataclass(frozen=True)
class ActivityLog:
    """Append-only record of one successful mutation."""

    action: str
    entity: str
    details: Any
    request_info: dict[str, Any]
    occurred_at: datetime = field(default_factory=utcnow)
    employee_id: int | None = None
    id: int | None = None

    @classmethod
    def create(
        cls,
        action: str,
        entity: str,
        details: Any,
        request_info: dict[str, Any],
        employee_id: int | None = None,
        occurred_at: datetime | None = None,
    ) -> "ActivityLog":
        log = cls(
            action=action,
            entity=entity,
            details=details,
            request_info=request_info,
            employee_id=employee_id,
            occurred_at=occurred_at or utcnow(),
        )
        log.validate()
        return log

    def validate(self) -> None:
        for name in ("action", "entity"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise ActivityLogBusinessError(f"Activity log {name} is required")
            if len(value) > 100:
                raise ActivityLogBusinessError(
                    f"Activity log {name} must not exceed 100 characters"
                )
        if not isinstance(self.occurred_at, datetime):
            raise ActivityLogBusinessError("Activity log occurred_at must be a datetime")
        if not isinstance(self.request_info, dict):
            raise ActivityLogBusinessError("Request info must be an object")
        user_name = self.request_info.get("user_name")
        if not user_name or not str(user_name).strip():
            raise ActivityLogBusinessError("Request info user_name is required")
        for key, limit in REQUEST_INFO_LIMITS.items():
            value = self.request_info.get(key)
            if value is not None and len(str(value)) > limit:
                raise ActivityLogBusinessError(
                    f"Request info {key} must not exceed {limit} characters"
                )
