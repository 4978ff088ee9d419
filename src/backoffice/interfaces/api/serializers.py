"""Entity to JSON-ready dict conversion."""

import dataclasses
from datetime import date, datetime
from typing import Any

_HIDDEN_FIELDS = frozenset({"password"})


def _plain(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return serialize(value)
    return value


def serialize(entity: Any) -> dict[str, Any]:
    """Dataclass to dict; credentials are never included."""
    return {
        f.name: _plain(getattr(entity, f.name))
        for f in dataclasses.fields(entity)
        if f.name not in _HIDDEN_FIELDS
    }


def serialize_many(entities: list[Any]) -> list[dict[str, Any]]:
    return [serialize(e) for e in entities]
