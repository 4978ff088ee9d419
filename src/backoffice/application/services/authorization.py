"""Authorization guard used by use cases inside their transaction."""

import logging

from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.unit_of_work import UnitOfWork
from backoffice.domain.exceptions import AuthenticationRequired, PermissionDenied
from backoffice.domain.value_objects import RequestInfo

logger = logging.getLogger(__name__)


async def require_permission(
    checker: PermissionChecker,
    uow: UnitOfWork,
    request_info: RequestInfo,
    *permissions: str,
) -> None:
    """Raise unless the actor holds at least one of ``permissions``."""
    if request_info.user_id is None:
        raise AuthenticationRequired()
    if not await checker.has_any_permission(uow, request_info.user_id, permissions):
        logger.info(
            "Denied %s for user %s", ", ".join(permissions), request_info.user_id
        )
        raise PermissionDenied(f"Missing permission: {' or '.join(permissions)}")
