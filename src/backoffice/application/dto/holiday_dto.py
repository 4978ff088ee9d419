"""Holiday DTOs."""

from dataclasses import dataclass
import datetime as dt


@dataclass
class HolidayCreateInput:
    name: str
    date: dt.date
    type: str
    description: str | None = None
    is_recurring: bool = False
