"""Role permissions, user roles and user permission overrides."""

import falcon.asgi

from backoffice.application.dto.role_dto import RolePermissionsInput
from backoffice.application.dto.user_dto import UserPermissionsInput, UserRolesInput
from backoffice.application.use_cases.role_permission.assign_permissions import (
    AssignPermissionsToRoleUseCase,
)
from backoffice.application.use_cases.role_permission.get_role_permissions import (
    GetRolePermissionsUseCase,
)
from backoffice.application.use_cases.role_permission.remove_permissions import (
    RemovePermissionsFromRoleUseCase,
)
from backoffice.application.use_cases.user_permission.get_user_permissions import (
    GetUserPermissionsUseCase,
)
from backoffice.application.use_cases.user_permission.override_permissions import (
    DenyPermissionsToUserUseCase,
    GrantPermissionsToUserUseCase,
)
from backoffice.application.use_cases.user_permission.remove_overrides import (
    RemovePermissionsFromUserUseCase,
)
from backoffice.application.use_cases.user_role.assign_roles import AssignRolesToUserUseCase
from backoffice.application.use_cases.user_role.get_user_roles import GetUserRolesUseCase
from backoffice.application.use_cases.user_role.remove_roles import RemoveRolesFromUserUseCase
from backoffice.interfaces.api.request_context import require_request_info
from backoffice.interfaces.api.schemas import PermissionIdsBody, RoleIdsBody
from backoffice.interfaces.api.serializers import serialize, serialize_many


async def _optional_media(req: falcon.asgi.Request) -> dict:
    media = await req.get_media(default_when_empty=None)
    return media or {}


class RolePermissionsResource:
    """GET/POST/DELETE /v1/roles/{id}/permissions."""

    def __init__(
        self,
        get_permissions: GetRolePermissionsUseCase,
        assign_permissions: AssignPermissionsToRoleUseCase,
        remove_permissions: RemovePermissionsFromRoleUseCase,
    ) -> None:
        self._get = get_permissions
        self._assign = assign_permissions
        self._remove = remove_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        links = await self._get.execute(item_id, info)
        resp.media = {"role_id": item_id, "items": serialize_many(links)}

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PermissionIdsBody.model_validate(await req.get_media())
        links = await self._assign.execute(
            RolePermissionsInput(item_id, body.permission_ids, body.replace), info
        )
        resp.media = {"role_id": item_id, "items": serialize_many(links)}

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PermissionIdsBody.model_validate(await _optional_media(req))
        links = await self._remove.execute(
            RolePermissionsInput(item_id, body.permission_ids), info
        )
        resp.media = {"role_id": item_id, "items": serialize_many(links)}


class UserRolesResource:
    """GET/POST/DELETE /v1/users/{id}/roles."""

    def __init__(
        self,
        get_roles: GetUserRolesUseCase,
        assign_roles: AssignRolesToUserUseCase,
        remove_roles: RemoveRolesFromUserUseCase,
    ) -> None:
        self._get = get_roles
        self._assign = assign_roles
        self._remove = remove_roles

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._get.execute(item_id, info))

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = RoleIdsBody.model_validate(await req.get_media())
        result = await self._assign.execute(
            UserRolesInput(item_id, body.role_ids, body.replace), info
        )
        resp.media = serialize(result)

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = RoleIdsBody.model_validate(await _optional_media(req))
        result = await self._remove.execute(UserRolesInput(item_id, body.role_ids), info)
        resp.media = serialize(result)


class UserPermissionsResource:
    """GET, POST (grant), POST /deny, DELETE /v1/users/{id}/permissions."""

    def __init__(
        self,
        get_permissions: GetUserPermissionsUseCase,
        grant_permissions: GrantPermissionsToUserUseCase,
        deny_permissions: DenyPermissionsToUserUseCase,
        remove_permissions: RemovePermissionsFromUserUseCase,
    ) -> None:
        self._get = get_permissions
        self._grant = grant_permissions
        self._deny = deny_permissions
        self._remove = remove_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        resp.media = serialize(await self._get.execute(item_id, info))

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PermissionIdsBody.model_validate(await req.get_media())
        result = await self._grant.execute(
            UserPermissionsInput(item_id, body.permission_ids, body.replace), info
        )
        resp.media = serialize(result)

    async def on_post_deny(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PermissionIdsBody.model_validate(await req.get_media())
        result = await self._deny.execute(
            UserPermissionsInput(item_id, body.permission_ids, body.replace), info
        )
        resp.media = serialize(result)

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, item_id: int
    ) -> None:
        info = require_request_info(req)
        body = PermissionIdsBody.model_validate(await _optional_media(req))
        result = await self._remove.execute(
            UserPermissionsInput(item_id, body.permission_ids), info
        )
        resp.media = serialize(result)
