"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from backoffice.interfaces.api.errors import register_error_handlers
from backoffice.interfaces.api.resources.activity_logs import ActivityLogsResource
from backoffice.interfaces.api.resources.aggregates import (
    AggregateCollectionResource,
    AggregateItemResource,
)
from backoffice.interfaces.api.resources.health import HealthResource
from backoffice.interfaces.api.resources.links import (
    RolePermissionsResource,
    UserPermissionsResource,
    UserRolesResource,
)
from backoffice.interfaces.api.resources.users import UserAccountResource


@dataclass
class ApiResources:
    health: HealthResource
    roles: AggregateCollectionResource
    role: AggregateItemResource
    permissions: AggregateCollectionResource
    permission: AggregateItemResource
    users: AggregateCollectionResource
    user: AggregateItemResource
    user_account: UserAccountResource
    holidays: AggregateCollectionResource
    holiday: AggregateItemResource
    role_permissions: RolePermissionsResource
    user_roles: UserRolesResource
    user_permissions: UserPermissionsResource
    activity_logs: ActivityLogsResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")

    for prefix, collection, item in (
        ("roles", resources.roles, resources.role),
        ("permissions", resources.permissions, resources.permission),
        ("users", resources.users, resources.user),
        ("holidays", resources.holidays, resources.holiday),
    ):
        app.add_route(f"/v1/{prefix}", collection)
        app.add_route(f"/v1/{prefix}/combobox", collection, suffix="combobox")
        app.add_route(f"/v1/{prefix}/{{item_id:int}}", item)
        app.add_route(f"/v1/{prefix}/{{item_id:int}}/archive", item, suffix="archive")
        app.add_route(f"/v1/{prefix}/{{item_id:int}}/restore", item, suffix="restore")

    app.add_route(
        "/v1/users/{item_id:int}/password", resources.user_account, suffix="password"
    )
    app.add_route(
        "/v1/users/{item_id:int}/verify-email", resources.user_account, suffix="verify_email"
    )
    app.add_route("/v1/roles/{item_id:int}/permissions", resources.role_permissions)
    app.add_route("/v1/users/{item_id:int}/roles", resources.user_roles)
    app.add_route("/v1/users/{item_id:int}/permissions", resources.user_permissions)
    app.add_route(
        "/v1/users/{item_id:int}/permissions/deny", resources.user_permissions, suffix="deny"
    )
    app.add_route("/v1/activity-logs", resources.activity_logs)
    return app
