"""User entity - the principal that logs in and is authorized."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from http import HTTPStatus
from typing import Any

from backoffice.domain.entities.base import AuditedEntity, utcnow
from backoffice.domain.exceptions import UserBusinessError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-+()]+$")

PASSWORD_MIN_LENGTH = 8
# bcrypt rejects passwords longer than 72 bytes
PASSWORD_MAX_BYTES = 72
MAX_AGE_YEARS = 150


@dataclass(kw_only=True)
class User(AuditedEntity):
    """User with a unique, immutable username and a unique email.

    ``password`` always holds the hash, never the plain text.
    """

    label = "User"
    error = UserBusinessError
    updatable_fields = frozenset(
        {
            "email",
            "first_name",
            "middle_name",
            "last_name",
            "phone",
            "date_of_birth",
            "is_active",
        }
    )

    username: str
    email: str
    password: str
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    is_active: bool = True
    is_email_verified: bool = False
    email_verified_at: datetime | None = None
    password_changed_at: datetime | None = None
    password_changed_by: str | None = None

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        password_hash: str,
        created_by: str,
        **profile: Any,
    ) -> "User":
        user = cls(
            username=username.strip(),
            email=email.strip().lower(),
            password=password_hash,
            created_by=created_by,
            updated_by=created_by,
            **profile,
        )
        user.validate()
        return user

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(p for p in parts if p) or self.username

    @property
    def can_authenticate(self) -> bool:
        return self.is_active and not self.is_archived

    def validate(self) -> None:
        self._check_length("username", self.username, 100, min_length=3, required=True)
        self._check_length("email", self.email, 255, required=True)
        if not EMAIL_PATTERN.match(self.email):
            raise self.error("Invalid email format")
        for name in ("first_name", "middle_name", "last_name"):
            self._check_length(name.replace("_", " "), getattr(self, name), 100)
        if self.phone:
            self._check_length("phone", self.phone, 20)
            if not PHONE_PATTERN.match(self.phone):
                raise self.error("Invalid phone number format")
        if self.date_of_birth is not None:
            self._validate_date_of_birth(self.date_of_birth)

    def _validate_date_of_birth(self, value: date) -> None:
        today = utcnow().date()
        if value > today:
            raise self.error("Date of birth cannot be in the future")
        age = today.year - value.year - ((today.month, today.day) < (value.month, value.day))
        if age > MAX_AGE_YEARS:
            raise self.error("Date of birth is not realistic")

    def update(
        self,
        changes: Mapping[str, Any],
        updated_by: str,
        now: datetime | None = None,
    ) -> None:
        if "username" in changes and changes["username"] != self.username:
            raise self.error("Username cannot be changed")
        changes = {k: v for k, v in changes.items() if k != "username"}
        if "email" in changes and changes["email"]:
            changes["email"] = changes["email"].strip().lower()
        super().update(changes, updated_by, now)

    @classmethod
    def validate_password(cls, raw_password: str) -> None:
        """Rules for a plain-text password before it is hashed."""
        if not raw_password or len(raw_password) < PASSWORD_MIN_LENGTH:
            raise cls.error(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )
        if len(raw_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise cls.error(
                f"Password must not exceed {PASSWORD_MAX_BYTES} bytes"
            )

    def change_password(
        self, password_hash: str, changed_by: str, now: datetime | None = None
    ) -> None:
        self.ensure_not_archived("changed")
        moment = now or utcnow()
        self.password = password_hash
        self.password_changed_at = moment
        self.password_changed_by = changed_by
        self.touch(changed_by, moment)

    def verify_email(self, verified_by: str, now: datetime | None = None) -> None:
        self.ensure_not_archived("verified")
        if self.is_email_verified:
            raise self.error("Email is already verified", HTTPStatus.CONFLICT)
        moment = now or utcnow()
        self.is_email_verified = True
        self.email_verified_at = moment
        self.touch(verified_by, moment)
