"""Keyset pagination DTOs."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class PageQuery:
    """Input for paginated list queries. ``cursor`` is the last id seen."""

    search: str | None = None
    cursor: int | None = None
    limit: int = DEFAULT_PAGE_SIZE
    include_archived: bool = False

    def __post_init__(self) -> None:
        self.limit = max(1, min(self.limit, MAX_PAGE_SIZE))


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: int | None = None
