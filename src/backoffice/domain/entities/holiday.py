"""Holiday entity."""

from dataclasses import dataclass
import datetime as dt

from backoffice.domain.entities.base import AuditedEntity
from backoffice.domain.exceptions import HolidayBusinessError


@dataclass(kw_only=True)
class Holiday(AuditedEntity):
    label = "Holiday"
    error = HolidayBusinessError
    updatable_fields = frozenset({"name", "date", "type", "description", "is_recurring"})

    name: str
    date: dt.date
    type: str
    description: str | None = None
    is_recurring: bool = False

    @classmethod
    def create(
        cls,
        name: str,
        date: dt.date,
        type: str,
        created_by: str,
        description: str | None = None,
        is_recurring: bool = False,
    ) -> "Holiday":
        holiday = cls(
            name=name.strip(),
            date=date,
            type=type,
            description=description,
            is_recurring=is_recurring,
            created_by=created_by,
            updated_by=created_by,
        )
        holiday.validate()
        return holiday

    def validate(self) -> None:
        self._check_length("name", self.name, 255, min_length=2, required=True)
        if self.date is None:
            raise self.error("Holiday date is required")
        self._check_length("type", self.type, 50, required=True)
        self._check_length("description", self.description, 500)
