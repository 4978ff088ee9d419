"""Activity log API resource - read only."""

import falcon.asgi

from backoffice.application.use_cases.activity_log.list_activity_logs import (
    ListActivityLogsUseCase,
)
from backoffice.interfaces.api.request_context import require_request_info
from backoffice.interfaces.api.serializers import serialize_many


class ActivityLogsResource:
    """GET /v1/activity-logs?entity=...|action=...&limit=..."""

    def __init__(self, list_logs: ListActivityLogsUseCase) -> None:
        self._list = list_logs

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        info = require_request_info(req)
        logs = await self._list.execute(
            info,
            entity=req.get_param("entity"),
            action=req.get_param("action"),
            limit=req.get_param_as_int("limit", min_value=1),
        )
        resp.media = {"items": serialize_many(logs)}
