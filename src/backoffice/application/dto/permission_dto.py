"""Permission DTOs."""

from dataclasses import dataclass


@dataclass
class PermissionCreateInput:
    resource: str
    action: str
    name: str | None = None
    description: str | None = None
