"""Request context passed explicitly through every command."""

from dataclasses import asdict, dataclass

SYSTEM_USER_NAME = "system"


@dataclass(frozen=True)
class RequestInfo:
    """Who is acting, and where the request came from.

    ``user_id`` is the acting principal used for authorization; the rest
    is recorded verbatim in the activity log.
    """

    user_id: int | None = None
    user_name: str = SYSTEM_USER_NAME
    ip_address: str | None = None
    user_agent: str | None = None
    session_id: str | None = None

    @property
    def actor(self) -> str:
        return self.user_name or SYSTEM_USER_NAME

    def to_audit_dict(self) -> dict[str, str | None]:
        """Shape stored in ``activitylogs.request_info``."""
        data = asdict(self)
        data.pop("user_id")
        data["user_name"] = self.actor
        return data
