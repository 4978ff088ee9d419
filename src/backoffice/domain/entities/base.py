"""Audit stamps and the archive/restore lifecycle shared by aggregates."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any, ClassVar

from backoffice.domain.exceptions import BusinessRuleError


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(kw_only=True)
class AuditedEntity:
    """Base for aggregates with created/updated/deleted stamps.

    A row is archived (soft-deleted) when ``deleted_at`` is set, and
    ``deleted_by`` is always set together with it.
    """

    label: ClassVar[str] = "Record"
    error: ClassVar[type[BusinessRuleError]] = BusinessRuleError
    updatable_fields: ClassVar[frozenset[str]] = frozenset()

    id: int | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_by: str | None = None
    updated_at: datetime | None = None
    deleted_by: str | None = None
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = utcnow()
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def is_archived(self) -> bool:
        return self.deleted_at is not None

    def validate(self) -> None:
        """Check field invariants. Subclasses raise ``self.error``."""

    def ensure_not_archived(self, verb: str = "updated") -> None:
        if self.is_archived:
            raise self.error(
                f"{self.label} is archived and cannot be {verb}",
                HTTPStatus.CONFLICT,
            )

    def update(
        self,
        changes: Mapping[str, Any],
        updated_by: str,
        now: datetime | None = None,
    ) -> None:
        """Apply a partial update. Only keys present in ``changes`` are touched."""
        self.ensure_not_archived()
        unknown = set(changes) - self.updatable_fields
        if unknown:
            raise self.error(
                f"{self.label} fields cannot be updated: {', '.join(sorted(unknown))}"
            )
        for key, value in changes.items():
            setattr(self, key, value)
        self.validate()
        self.touch(updated_by, now)

    def archive(self, deleted_by: str, now: datetime | None = None) -> None:
        if self.is_archived:
            raise self.error(f"{self.label} is already archived.", HTTPStatus.CONFLICT)
        self.deleted_at = now or utcnow()
        self.deleted_by = deleted_by

    def restore(self, restored_by: str, now: datetime | None = None) -> None:
        if not self.is_archived:
            raise self.error(
                f"{self.label} with ID {self.id} is not archived.",
                HTTPStatus.CONFLICT,
            )
        self.deleted_at = None
        self.deleted_by = None
        self.touch(restored_by, now)

    def touch(self, updated_by: str, now: datetime | None = None) -> None:
        moment = now or utcnow()
        if self.created_at is not None and moment < self.created_at:
            moment = self.created_at
        self.updated_at = moment
        self.updated_by = updated_by

    def _check_length(
        self,
        field_name: str,
        value: str | None,
        max_length: int,
        min_length: int = 0,
        required: bool = False,
    ) -> None:
        """Length rule for a string field, using the aggregate's error type."""
        if value is None or not value.strip():
            if required:
                raise self.error(f"{self.label} {field_name} is required")
            return
        if len(value.strip()) < min_length:
            raise self.error(
                f"{self.label} {field_name} must be at least {min_length} characters long"
            )
        if len(value) > max_length:
            raise self.error(
                f"{self.label} {field_name} must not exceed {max_length} characters"
            )
