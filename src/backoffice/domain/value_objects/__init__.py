"""Domain value objects."""

from backoffice.domain.value_objects.audit import AuditAction, AuditEntity
from backoffice.domain.value_objects.decision import Decision
from backoffice.domain.value_objects.error_code import ErrorCode
from backoffice.domain.value_objects.permission_catalog import (
    PermissionAction,
    PermissionResource,
    permission_name,
    split_permission_name,
)
from backoffice.domain.value_objects.request_info import SYSTEM_USER_NAME, RequestInfo

__all__ = [
    "AuditAction",
    "AuditEntity",
    "Decision",
    "ErrorCode",
    "PermissionAction",
    "PermissionResource",
    "RequestInfo",
    "SYSTEM_USER_NAME",
    "permission_name",
    "split_permission_name",
]
