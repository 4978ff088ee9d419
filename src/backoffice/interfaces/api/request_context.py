"""Per-request actor and metadata, passed explicitly to use cases."""

import ipaddress

import falcon.asgi

from backoffice.domain.entities.activity_log import REQUEST_INFO_LIMITS
from backoffice.domain.exceptions import AuthenticationRequired
from backoffice.domain.value_objects import RequestInfo

ANONYMOUS_USER_NAME = "anonymous"


def _valid_ip(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def _clip(value: str | None, field: str) -> str | None:
    return value[: REQUEST_INFO_LIMITS[field]] if value else None


def client_ip(req: falcon.asgi.Request) -> str | None:
    """First X-Forwarded-For hop if it parses as an address, else the peer."""
    forwarded = req.get_header("X-Forwarded-For")
    if forwarded:
        ip = _valid_ip(forwarded.split(",")[0])
        if ip:
            return ip
    return _valid_ip(req.remote_addr)


def build_request_info(
    req: falcon.asgi.Request,
    user_id: int | None = None,
    user_name: str = ANONYMOUS_USER_NAME,
) -> RequestInfo:
    # Header values are clipped to the activity log column limits
    return RequestInfo(
        user_id=user_id,
        user_name=user_name,
        ip_address=client_ip(req),
        user_agent=_clip(req.get_header("User-Agent"), "user_agent"),
        session_id=_clip(req.get_header("X-Session-Id"), "session_id"),
    )


def require_request_info(req: falcon.asgi.Request) -> RequestInfo:
    """RequestInfo of an authenticated user, or raise 401."""
    info = getattr(req.context, "request_info", None)
    if info is None or info.user_id is None:
        raise AuthenticationRequired()
    return info
