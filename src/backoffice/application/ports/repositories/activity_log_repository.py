"""Activity log repository port - append and read only."""

from typing import Protocol

from backoffice.domain.entities import ActivityLog


class ActivityLogRepository(Protocol):
    async def add(self, log: ActivityLog) -> ActivityLog: ...

    async def list_all(self, limit: int | None = None) -> list[ActivityLog]: ...

    async def list_by_entity(self, entity: str, limit: int | None = None) -> list[ActivityLog]: ...

    async def list_by_action(self, action: str, limit: int | None = None) -> list[ActivityLog]: ...
