"""Unit tests for aggregate invariants."""

import datetime as dt
from datetime import UTC, datetime, timedelta

import pytest

from backoffice.domain.entities import Holiday, Permission, Role, User
from backoffice.domain.exceptions import (
    HolidayBusinessError,
    PermissionBusinessError,
    RoleBusinessError,
    UserBusinessError,
)


def _role(**kwargs) -> Role:
    role = Role.create("Editor", "Edits content", created_by="admin")
    role.id = 5
    for key, value in kwargs.items():
        setattr(role, key, value)
    return role


def test_archive_sets_deleted_pair() -> None:
    """Archiving stamps deleted_at and deleted_by together."""
    role = _role()
    role.archive("alice")
    assert role.is_archived
    assert role.deleted_by == "alice"
    assert role.deleted_at is not None


def test_archive_twice_is_conflict() -> None:
    """Archiving an archived role is a 409 business error."""
    role = _role()
    role.archive("alice")
    with pytest.raises(RoleBusinessError, match="Role is already archived.") as exc_info:
        role.archive("bob")
    assert exc_info.value.status_code == 409
    assert role.deleted_by == "alice"


def test_restore_clears_deleted_pair() -> None:
    """Restoring clears both deleted fields and touches the update stamp."""
    role = _role()
    role.archive("alice")
    role.restore("bob")
    assert not role.is_archived
    assert role.deleted_by is None
    assert role.updated_by == "bob"


def test_restore_active_role_is_conflict() -> None:
    """Only archived rows can be restored."""
    with pytest.raises(RoleBusinessError, match="Role with ID 5 is not archived.") as exc_info:
        _role().restore("bob")
    assert exc_info.value.status_code == 409


def test_update_archived_role_is_rejected() -> None:
    """Archived rows must be restored before editing."""
    role = _role()
    role.archive("alice")
    with pytest.raises(RoleBusinessError, match="archived and cannot be updated"):
        role.update({"name": "Writers"}, "bob")


def test_update_touches_only_given_fields() -> None:
    """A partial update leaves other fields alone and stamps updated_by."""
    role = _role()
    role.update({"description": None}, "bob")
    assert role.name == "Editor"
    assert role.description is None
    assert role.updated_by == "bob"


def test_update_rejects_unknown_fields() -> None:
    """Fields outside the updatable set are refused."""
    with pytest.raises(RoleBusinessError, match="cannot be updated: created_by"):
        _role().update({"created_by": "mallory"}, "bob")


def test_updated_at_never_precedes_created_at() -> None:
    """A clock behind created_at is clamped."""
    role = _role()
    role.touch("bob", role.created_at - timedelta(hours=1))
    assert role.updated_at == role.created_at


@pytest.mark.parametrize("name", ["", " ", "A", "x" * 256])
def test_role_name_length(name: str) -> None:
    """Role name is required and between 2 and 255 characters."""
    with pytest.raises(RoleBusinessError):
        Role.create(name, None, created_by="admin")


def test_permission_name_defaults_to_resource_action() -> None:
    """Permission name is built from resource and action."""
    permission = Permission.create("users", "update", created_by="admin")
    assert permission.name == "users:update"


def test_permission_requires_action() -> None:
    """Resource and action are both required."""
    with pytest.raises(PermissionBusinessError, match="action is required"):
        Permission.create("users", "", created_by="admin")


def test_user_email_is_normalized_and_validated() -> None:
    """Emails are lower-cased; malformed ones are rejected."""
    user = User.create("ana", "Ana@Example.COM", "hash", created_by="admin")
    assert user.email == "ana@example.com"
    with pytest.raises(UserBusinessError, match="Invalid email format"):
        User.create("ana", "not-an-email", "hash", created_by="admin")


def test_username_is_immutable() -> None:
    """A username change is a business error."""
    user = User.create("ana", "ana@example.com", "hash", created_by="admin")
    with pytest.raises(UserBusinessError, match="Username cannot be changed"):
        user.update({"username": "anna"}, "admin")


def test_user_date_of_birth_rules() -> None:
    """Future and unrealistic birth dates are rejected."""
    today = datetime.now(UTC).date()
    with pytest.raises(UserBusinessError, match="cannot be in the future"):
        User.create(
            "ana", "ana@example.com", "hash", created_by="admin",
            date_of_birth=today + timedelta(days=1),
        )
    with pytest.raises(UserBusinessError, match="not realistic"):
        User.create(
            "ana", "ana@example.com", "hash", created_by="admin",
            date_of_birth=dt.date(today.year - 151, 1, 1),
        )


def test_user_phone_format() -> None:
    """Phone numbers allow digits, spaces and +-() only."""
    User.create("ana", "ana@example.com", "hash", created_by="admin", phone="+63 (2) 555-0100")
    with pytest.raises(UserBusinessError, match="Invalid phone number format"):
        User.create("ana", "ana@example.com", "hash", created_by="admin", phone="call me")


def test_password_rules() -> None:
    """Passwords need at least 8 characters and fit bcrypt's 72-byte input."""
    User.validate_password("s3cret-pass")
    User.validate_password("p" * 72)
    with pytest.raises(UserBusinessError, match="at least 8"):
        User.validate_password("short")
    with pytest.raises(UserBusinessError, match="must not exceed 72 bytes") as exc_info:
        User.validate_password("p" * 73)
    assert exc_info.value.status_code == 400
    # 25 characters, 75 bytes
    with pytest.raises(UserBusinessError, match="72 bytes"):
        User.validate_password("€" * 25)


def test_verify_email_once() -> None:
    """Verifying twice is a conflict."""
    user = User.create("ana", "ana@example.com", "hash", created_by="admin")
    user.verify_email("admin")
    assert user.is_email_verified and user.email_verified_at is not None
    with pytest.raises(UserBusinessError, match="already verified") as exc_info:
        user.verify_email("admin")
    assert exc_info.value.status_code == 409


def test_change_password_stamps_actor() -> None:
    """Password change records who and when."""
    user = User.create("ana", "ana@example.com", "old", created_by="admin")
    user.change_password("new-hash", "helpdesk")
    assert user.password == "new-hash"
    assert user.password_changed_by == "helpdesk"
    assert user.updated_by == "helpdesk"


def test_archived_user_cannot_authenticate() -> None:
    """Inactive or archived users are locked out."""
    user = User.create("ana", "ana@example.com", "hash", created_by="admin")
    assert user.can_authenticate
    user.archive("admin")
    assert not user.can_authenticate


def test_holiday_requires_type() -> None:
    """Holiday type is required."""
    with pytest.raises(HolidayBusinessError, match="type is required"):
        Holiday.create("New Year", dt.date(2025, 1, 1), "", created_by="admin")


def test_holiday_update_changes_date() -> None:
    """Holiday date is updatable."""
    holiday = Holiday.create("Rizal Day", dt.date(2025, 12, 30), "regular", created_by="admin")
    holiday.update({"date": dt.date(2026, 12, 30), "is_recurring": True}, "admin")
    assert holiday.date == dt.date(2026, 12, 30)
    assert holiday.is_recurring
