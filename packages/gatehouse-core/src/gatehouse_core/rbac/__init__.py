"""In-memory RBAC registry with cascading removal and thread-safe queries."""

from gatehouse_core.rbac.controller import RBAC
from gatehouse_core.rbac.errors import (
    PermissionNotRegisteredError,
    RBACError,
    RoleNotRegisteredError,
    UserNotRegisteredError,
)
from gatehouse_core.rbac.lock import ReadWriteLock

__all__ = [
    "RBAC",
    "PermissionNotRegisteredError",
    "RBACError",
    "ReadWriteLock",
    "RoleNotRegisteredError",
    "UserNotRegisteredError",
]
