"""Change tracking - minimal before/after diffs for the audit trail."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any

Snapshot = dict[str, Any]


@dataclass(frozen=True)
class TrackedField:
    """A field to snapshot, with an optional transform applied on read."""

    name: str
    transform: Callable[[Any], Any] | None = None


FieldSpec = TrackedField | str


def in_timezone(tz: tzinfo) -> Callable[[Any], Any]:
    """Transform that normalizes datetimes to ``tz`` and renders ISO-8601."""

    def transform(value: Any) -> Any:
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(tz)
            return value.isoformat()
        if isinstance(value, date):
            return value.isoformat()
        return value

    return transform


def sorted_list(value: Any) -> Any:
    """Transform for set-valued fields, so ordering never shows up as a change."""
    if value is None:
        return []
    return sorted(value)


def _read(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def extract_state(entity: Any, fields: Iterable[FieldSpec]) -> Snapshot:
    """Snapshot the tracked fields of ``entity``. ``None`` yields an empty snapshot."""
    if entity is None:
        return {}
    state: Snapshot = {}
    for spec in fields:
        tracked = TrackedField(spec) if isinstance(spec, str) else spec
        value = _read(entity, tracked.name)
        if tracked.transform is not None:
            value = tracked.transform(value)
        state[tracked.name] = value
    return state


def values_equal(a: Any, b: Any) -> bool:
    """Deep equality; a missing value equals ``None``."""
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def diff(
    before: Snapshot,
    after: Snapshot,
    fields: Iterable[str] | None = None,
) -> dict[str, dict[str, Any]]:
    """Return ``{field: {"old": ..., "new": ...}}`` for changed fields only.

    Fields default to the keys of ``before``.
    """
    names = list(fields) if fields is not None else list(before)
    changes: dict[str, dict[str, Any]] = {}
    for name in names:
        old = before.get(name)
        new = after.get(name)
        if not values_equal(old, new):
            changes[name] = {"old": old, "new": new}
    return changes
