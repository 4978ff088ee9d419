"""Request logging middleware - one log line per HTTP request."""

import logging
import time

import falcon
import falcon.asgi

from backoffice.interfaces.api.request_context import client_ip

logger = logging.getLogger("backoffice.http")


class RequestLoggerMiddleware:
    """Log method, path, status, latency, client IP and user agent.

    Bodies are never logged; they may carry passwords.
    """

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.started_at = time.perf_counter()

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        started = getattr(req.context, "started_at", None)
        latency_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        status_code = falcon.http_status_to_code(resp.status)
        level = logging.ERROR if status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s %s %sms",
            req.method,
            req.path,
            status_code,
            latency_ms,
            extra={
                "method": req.method,
                "path": req.path,
                "status_code": status_code,
                "latency_ms": latency_ms,
                "ip_address": client_ip(req),
                "user_agent": req.get_header("User-Agent") or "Unknown",
            },
        )
