"""Domain exceptions.

Every error carries a stable ``code`` and an HTTP-style ``status_code`` so
the API layer can render it without knowing the concrete class.
"""

from http import HTTPStatus

from backoffice.domain.value_objects.error_code import ErrorCode


class BackofficeError(Exception):
    """Base exception for the back office."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"
    retryable: bool = False

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, object]:
        return {"error": str(self.code), "message": self.message}


class AuthenticationRequired(BackofficeError):
    """Request carries no usable identity."""

    code = ErrorCode.AUTHENTICATION_REQUIRED
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication required"


class PermissionDenied(BackofficeError):
    """User does not have permission for the requested action."""

    code = ErrorCode.PERMISSION_DENIED
    status_code = HTTPStatus.FORBIDDEN
    default_message = "Permission denied"


class ValidationError(BackofficeError):
    """Request payload failed validation."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Validation failed"


# --- Business rule violations ---


class BusinessRuleError(BackofficeError):
    """A business rule was violated. Never retried automatically."""

    code = ErrorCode.BUSINESS_RULE_VIOLATION
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Business rule violated"


class RoleBusinessError(BusinessRuleError):
    code = ErrorCode.ROLE_BUSINESS_ERROR


class PermissionBusinessError(BusinessRuleError):
    code = ErrorCode.PERMISSION_BUSINESS_ERROR


class UserBusinessError(BusinessRuleError):
    code = ErrorCode.USER_BUSINESS_ERROR


class HolidayBusinessError(BusinessRuleError):
    code = ErrorCode.HOLIDAY_BUSINESS_ERROR


class RolePermissionBusinessError(BusinessRuleError):
    code = ErrorCode.ROLE_PERMISSION_BUSINESS_ERROR


class UserRoleBusinessError(BusinessRuleError):
    code = ErrorCode.USER_ROLE_BUSINESS_ERROR


class UserPermissionBusinessError(BusinessRuleError):
    code = ErrorCode.USER_PERMISSION_BUSINESS_ERROR


class ActivityLogBusinessError(BusinessRuleError):
    code = ErrorCode.ACTIVITY_LOG_BUSINESS_ERROR


# --- Storage failures (raised only at the transaction boundary) ---


class DatabaseError(BackofficeError):
    """Storage-layer failure translated from a database error code."""

    code = ErrorCode.INTERNAL_DATABASE_ERROR
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "An internal database error occurred"


class UniqueConstraintError(DatabaseError):
    code = ErrorCode.UNIQUE_CONSTRAINT_VIOLATION
    status_code = HTTPStatus.CONFLICT
    default_message = "A record with this information already exists"


class ForeignKeyViolationError(DatabaseError):
    code = ErrorCode.FOREIGN_KEY_VIOLATION
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Referenced record does not exist"


class NotNullViolationError(DatabaseError):
    code = ErrorCode.NOT_NULL_VIOLATION
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Required field is missing"


class CheckConstraintViolationError(DatabaseError):
    code = ErrorCode.CHECK_CONSTRAINT_VIOLATION
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Data validation failed"


class SerializationFailureError(DatabaseError):
    """Serialization failure or deadlock. Safe for the caller to retry."""

    code = ErrorCode.SERIALIZATION_FAILURE
    status_code = HTTPStatus.CONFLICT
    default_message = "Transaction conflict. Please retry"
    retryable = True


class InternalDatabaseError(DatabaseError):
    pass
