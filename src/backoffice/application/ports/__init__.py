"""Application ports - interfaces for external adapters."""

from backoffice.application.ports.password_hasher import PasswordHasher
from backoffice.application.ports.permission_checker import PermissionChecker
from backoffice.application.ports.unit_of_work import (
    TransactionExecutor,
    UnitOfWork,
    UnitOfWorkProvider,
)

__all__ = [
    "PasswordHasher",
    "PermissionChecker",
    "TransactionExecutor",
    "UnitOfWork",
    "UnitOfWorkProvider",
]
