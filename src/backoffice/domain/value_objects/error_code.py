"""Stable error codes surfaced to API callers."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes for domain and storage failures."""

    # Storage
    UNIQUE_CONSTRAINT_VIOLATION = "UNIQUE_CONSTRAINT_VIOLATION"
    FOREIGN_KEY_VIOLATION = "FOREIGN_KEY_VIOLATION"
    NOT_NULL_VIOLATION = "NOT_NULL_VIOLATION"
    CHECK_CONSTRAINT_VIOLATION = "CHECK_CONSTRAINT_VIOLATION"
    SERIALIZATION_FAILURE = "SERIALIZATION_FAILURE"
    INTERNAL_DATABASE_ERROR = "INTERNAL_DATABASE_ERROR"

    # Access
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Business rules
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    ROLE_BUSINESS_ERROR = "ROLE_BUSINESS_ERROR"
    PERMISSION_BUSINESS_ERROR = "PERMISSION_BUSINESS_ERROR"
    USER_BUSINESS_ERROR = "USER_BUSINESS_ERROR"
    HOLIDAY_BUSINESS_ERROR = "HOLIDAY_BUSINESS_ERROR"
    ROLE_PERMISSION_BUSINESS_ERROR = "ROLE_PERMISSION_BUSINESS_ERROR"
    USER_ROLE_BUSINESS_ERROR = "USER_ROLE_BUSINESS_ERROR"
    USER_PERMISSION_BUSINESS_ERROR = "USER_PERMISSION_BUSINESS_ERROR"
    ACTIVITY_LOG_BUSINESS_ERROR = "ACTIVITY_LOG_BUSINESS_ERROR"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
