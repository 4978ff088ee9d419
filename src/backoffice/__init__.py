"""Back office administration core: RBAC, transactional commands and audit trail."""

__version__ = "0.1.0"
