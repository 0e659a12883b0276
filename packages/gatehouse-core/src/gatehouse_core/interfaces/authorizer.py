"""Authorization interface consumed by host applications."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gatehouse_core.identity.models import Action, Object, Permission, Role, User


@runtime_checkable
class Authorizer(Protocol):
    """Decision surface of an RBAC backend."""

    def user_has_permission(self, user: User, permission: Permission) -> bool: ...

    def user_has_object_action(self, user: User, obj: Object | str, action: Action | str) -> bool: ...

    def user_has_role(self, user: User, role: Role) -> bool: ...
