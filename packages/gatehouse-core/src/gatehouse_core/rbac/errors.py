"""Exceptions raised when an operation references an unregistered entity."""

from __future__ import annotations

from gatehouse_core.identity.models import Permission, Role, User


class RBACError(Exception):
    """Base class for registry precondition failures."""

    message = "entity is not registered"

    def __init__(self, entity: object) -> None:
        self.entity = entity
        super().__init__(f"{self.message}: {entity}")


class PermissionNotRegisteredError(RBACError):
    """Raised when a permission is absent from the registered permissions."""

    message = "permission is not registered"

    def __init__(self, permission: Permission) -> None:
        super().__init__(permission)


class RoleNotRegisteredError(RBACError):
    """Raised when a role is absent from the registered roles."""

    message = "role is not registered"

    def __init__(self, role: Role) -> None:
        super().__init__(role)


class UserNotRegisteredError(RBACError):
    """Raised when a user is absent from the registered users."""

    message = "user is not registered"

    def __init__(self, user: User) -> None:
        super().__init__(user)
