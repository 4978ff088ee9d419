"""CRUD resources shared by roles, permissions, users and holidays."""

import falcon
import falcon.asgi
from pydantic import BaseModel

from backoffice.application.dto.pagination import DEFAULT_PAGE_SIZE, PageQuery
from backoffice.application.use_cases.lifecycle import (
    ArchiveEntityUseCase,
    ComboboxUseCase,
    GetEntityUseCase,
    ListEntitiesUseCase,
    RestoreEntityUseCase,
    UpdateEntityUseCase,
)
from backoffice.interfaces.api.request_context import require_request_info
from backoffice.interfaces.api.serializers import serialize, serialize_many


def page_query(req: falcon.asgi.Request) -> PageQuery:
    return PageQuery(
        search=req.get_param("search") or None,
        cursor=req.get_param_as_int("cursor"),
        limit=req.get_param_as_int("limit", default=DEFAULT_PAGE_SIZE, min_value=1),
        include_archived=req.get_param_as_bool("include_archived", default=False),
    )


class AggregateCollectionResource:
    """GET list, POST create, GET /combobox."""

    def __init__(
        self,
        list_entities: ListEntitiesUseCase,
        create_entity,
        combobox: ComboboxUseCase,
        create_body: type[BaseModel],
    ) -> None:
        self._list = list_entities
        self._create = create_entity
        self._combobox = combobox
        self._create_body = create_body

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        info = require_request_info(req)
        page = await self._list.execute(page_query(req), info)
        resp.media = {"items": serialize_many(page.items), "next_cursor": page.next_cursor}

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        info = require_request_info(req)
        body = self._create_body.model_validate(await req.get_media())
        entity = await self._create.execute(body.to_input(), info)
        resp.media = serialize(entity)
        resp.status = falcon.HTTP_201

    async def on_get_combobox(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        info = require_request_info(req)
        items = await self._combobox.execute(info)
        resp.media = {"items": [{"id": e.id, "label": _label(e)} for e in items]}


def _label(entity) -> str:
    return getattr(entity, "name", None) or getattr(entity, "username", "")


class AggregateItemResource:
    """GET, PATCH, POST /archive, POST /restore."""

    def __init__(
        self,
        get_entity: GetEntityUseCase,
        update_entity: UpdateEntityUseCase,
        archive_entity: ArchiveEntityUseCase,
        restore_entity: RestoreEntityUseCase,
        update_body: type[BaseModel],
    ) -> None:
        self._get = get_entity
        self._update = update_entity
        self._archive = archive_entity
        self._restore = restore_entity
        self._update_body = update_body

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._get.execute(item_id, info))

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = self._update_body.model_validate(await req.get_media())
        entity = await self._update.execute(item_id, body.model_dump(exclude_unset=True), info)
        resp.media = serialize(entity)

    async def on_post_archive(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._archive.execute(item_id, info))

    async def on_post_restore(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._restore.execute(item_id, info))
