"""Gatehouse Core - in-memory role-based access control registry."""

from gatehouse_core.identity import Action, Object, Permission, Role, User
from gatehouse_core.interfaces import Authorizer
from gatehouse_core.rbac import (
    RBAC,
    PermissionNotRegisteredError,
    RBACError,
    RoleNotRegisteredError,
    UserNotRegisteredError,
)
from gatehouse_core.config import GatehouseConfig, load_config
from gatehouse_core.policy import apply_policy, build_rbac

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Authorizer",
    "GatehouseConfig",
    "Object",
    "Permission",
    "PermissionNotRegisteredError",
    "RBAC",
    "RBACError",
    "Role",
    "RoleNotRegisteredError",
    "User",
    "UserNotRegisteredError",
    "apply_policy",
    "build_rbac",
    "load_config",
]
