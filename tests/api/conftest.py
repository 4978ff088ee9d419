"""Fixtures for API tests."""

import falcon.asgi
import pytest
from falcon.testing import TestClient

from backoffice.interfaces.api.app import create_app
from backoffice.interfaces.api.request_context import build_request_info
from backoffice.main import build_resources


class AuthBypassMiddleware:
    """Middleware that authenticates every request as a fixed user.

    ``X-Test-User: anonymous`` drops the identity so the 401 path can be
    exercised.
    """

    def __init__(self, user_id: int, user_name: str) -> None:
        self._user_id = user_id
        self._user_name = user_name

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if req.get_header("X-Test-User") == "anonymous":
            req.context.request_info = build_request_info(req)
            return
        req.context.request_info = build_request_info(req, self._user_id, self._user_name)


@pytest.fixture
def client_for(executor, permission_checker, audit_logger, plain_hasher):
    """Build a test client over the in-memory database acting as the given user."""

    def _client(user_id: int, user_name: str) -> TestClient:
        resources = build_resources(executor, permission_checker, audit_logger, plain_hasher)
        app = create_app(resources, middleware=[AuthBypassMiddleware(user_id, user_name)])
        return TestClient(app)

    return _client


@pytest.fixture
def client(client_for, catalog) -> TestClient:
    """Client acting as the seeded admin."""
    return client_for(catalog.admin.id, catalog.admin.username)
