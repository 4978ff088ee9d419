"""Authorization decision."""

from enum import StrEnum


class Decision(StrEnum):
    """Outcome of resolving a permission for a user."""

    ALLOWED = "allowed"
    DENIED = "denied"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOWED
