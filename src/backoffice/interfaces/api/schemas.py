"""Request bodies, validated with pydantic."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from backoffice.application.dto.holiday_dto import HolidayCreateInput
from backoffice.application.dto.permission_dto import PermissionCreateInput
from backoffice.application.dto.role_dto import RoleCreateInput
from backoffice.application.dto.user_dto import UserCreateInput


class _Body(BaseModel):
    model_config = ConfigDict(extra="forbid")


class RoleCreateBody(_Body):
    name: str
    description: str | None = None

    def to_input(self) -> RoleCreateInput:
        return RoleCreateInput(**self.model_dump())


class RoleUpdateBody(_Body):
    name: str | None = None
    description: str | None = None


class PermissionCreateBody(_Body):
    resource: str
    action: str
    name: str | None = None
    description: str | None = None

    def to_input(self) -> PermissionCreateInput:
        return PermissionCreateInput(**self.model_dump())


class PermissionUpdateBody(_Body):
    name: str | None = None
    resource: str | None = None
    action: str | None = None
    description: str | None = None


class UserCreateBody(_Body):
    username: str
    email: str
    password: str
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    date_of_birth: dt.date | None = None
    is_active: bool = True

    def to_input(self) -> UserCreateInput:
        return UserCreateInput(**self.model_dump())


class UserUpdateBody(_Body):
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    date_of_birth: dt.date | None = None
    is_active: bool | None = None


class PasswordChangeBody(_Body):
    password: str


class HolidayCreateBody(_Body):
    name: str
    date: dt.date
    type: str
    description: str | None = None
    is_recurring: bool = False

    def to_input(self) -> HolidayCreateInput:
        return HolidayCreateInput(**self.model_dump())


class HolidayUpdateBody(_Body):
    name: str | None = None
    date: dt.date | None = None
    type: str | None = None
    description: str | None = None
    is_recurring: bool | None = None


class PermissionIdsBody(_Body):
    permission_ids: list[int] = Field(default_factory=list)
    replace: bool = False


class RoleIdsBody(_Body):
    role_ids: list[int] = Field(default_factory=list)
    replace: bool = False
