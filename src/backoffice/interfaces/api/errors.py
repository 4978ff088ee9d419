"""Error handlers - render domain errors as JSON."""

import logging

import falcon
import falcon.asgi
import pydantic

from backoffice.domain.exceptions import BackofficeError
from backoffice.domain.value_objects import ErrorCode

logger = logging.getLogger(__name__)


async def handle_backoffice_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: BackofficeError, params
) -> None:
    resp.status = falcon.code_to_http_status(int(ex.status_code))
    body = ex.to_dict()
    if ex.retryable:
        body["retryable"] = True
    resp.media = body


async def handle_validation_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: pydantic.ValidationError, params
) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {
        "error": str(ErrorCode.VALIDATION_ERROR),
        "message": "Request validation failed",
        "details": [
            {"field": ".".join(str(p) for p in e["loc"]), "message": e["msg"]}
            for e in ex.errors()
        ],
    }


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": str(ErrorCode.INTERNAL_ERROR), "message": "Internal server error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(pydantic.ValidationError, handle_validation_error)
    app.add_error_handler(BackofficeError, handle_backoffice_error)
