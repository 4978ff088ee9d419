"""Auth middleware - resolves the bearer token to an active back office user."""

import logging

import falcon.asgi

from backoffice.application.ports.unit_of_work import TransactionExecutor, UnitOfWork
from backoffice.domain.entities import User
from backoffice.infrastructure.auth.keycloak_provider import KeycloakProvider
from backoffice.interfaces.api.request_context import build_request_info

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Sets ``req.context.user`` and ``req.context.request_info``.

    Archived or inactive users are treated as unauthenticated.
    """

    def __init__(
        self,
        keycloak_provider: KeycloakProvider | None,
        transaction_executor: TransactionExecutor,
    ) -> None:
        self._keycloak = keycloak_provider
        self._transactions = transaction_executor

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.user = None
        req.context.request_info = build_request_info(req)

        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or self._keycloak is None:
            return
        identity = await self._keycloak.decode_token(auth[7:])
        if identity is None or not identity.username:
            return

        async def work(uow: UnitOfWork) -> User | None:
            return await uow.users.get_by_username(identity.username)

        user = await self._transactions.execute("AUTHENTICATE", work)
        if user is None or not user.can_authenticate:
            logger.warning("Rejected login for %s: unknown, archived or inactive", identity.username)
            return
        req.context.user = user
        req.context.request_info = build_request_info(req, user.id, user.username)
