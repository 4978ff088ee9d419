"""Health check endpoints."""

from collections.abc import Awaitable, Callable

import falcon
import falcon.asgi


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, readiness_check: Callable[[], Awaitable[bool]] | None = None) -> None:
        self._readiness_check = readiness_check

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database)."""
        ready = self._readiness_check is None or await self._readiness_check()
        resp.media = {"status": "ready" if ready else "unavailable"}
        resp.status = falcon.HTTP_200 if ready else falcon.HTTP_503
