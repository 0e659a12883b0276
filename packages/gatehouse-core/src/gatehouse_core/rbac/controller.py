"""Thread-safe RBAC controller: registry, associations and authorization queries."""

from __future__ import annotations

import logging

from gatehouse_core.identity.models import Action, Object, Permission, Role, User
from gatehouse_core.rbac.errors import (
    PermissionNotRegisteredError,
    RoleNotRegisteredError,
    UserNotRegisteredError,
)
from gatehouse_core.rbac.lock import ReadWriteLock
from gatehouse_core.rbac.state import RBACState

logger = logging.getLogger(__name__)


class RBAC:
    """In-memory registry of users, roles and permissions.

    Entities must be registered before they can be associated or queried.
    Operations that reference an unregistered entity raise the matching
    ``*NotRegisteredError`` and change nothing. When several operands are
    missing, the role or user is reported before the permission, and the
    user before the role.

    All state sits behind one reader/writer lock: mutations (including the
    cascades triggered by removal) hold it exclusively, queries hold it
    shared. Instances are independent; there is no module-level registry.
    """

    def __init__(self) -> None:
        self._state = RBACState()
        self._lock = ReadWriteLock()

    # -- Precondition checks (caller holds the lock) ---------------------------

    def _require_permission(self, permission: Permission) -> None:
        if permission not in self._state.permissions:
            raise PermissionNotRegisteredError(permission)

    def _require_role(self, role: Role) -> None:
        if role not in self._state.roles:
            raise RoleNotRegisteredError(role)

    def _require_user(self, user: User) -> None:
        if user not in self._state.users:
            raise UserNotRegisteredError(user)

    # -- Permissions -----------------------------------------------------------

    def register_permission(self, permission: Permission) -> bool:
        """Register a permission. Returns False if it was already registered."""
        with self._lock.write():
            added = self._state.add_permission(permission)
        if added:
            logger.debug("Registered permission %s", permission)
        return added

    def remove_permission(self, permission: Permission) -> bool:
        """Unregister a permission and prune it from every role.

        Returns False if the permission was not registered.
        """
        with self._lock.write():
            if permission not in self._state.permissions:
                return False
            pruned = self._state.drop_permission(permission)
        logger.debug("Removed permission %s (pruned from %d roles)", permission, pruned)
        return True

    def list_permissions(self) -> set[Permission]:
        with self._lock.read():
            return set(self._state.permissions)

    def permission_exists(self, permission: Permission) -> bool:
        with self._lock.read():
            return permission in self._state.permissions

    # -- Roles -----------------------------------------------------------------

    def register_role(self, role: Role) -> bool:
        """Register a role. Returns False if it was already registered."""
        with self._lock.write():
            added = self._state.add_role(role)
        if added:
            logger.debug("Registered role %s", role)
        return added

    def remove_role(self, role: Role) -> bool:
        """Unregister a role, dropping its permissions and unassigning it from users.

        Returns False if the role was not registered.
        """
        with self._lock.write():
            if role not in self._state.roles:
                return False
            pruned = self._state.drop_role(role)
        logger.debug("Removed role %s (unassigned from %d users)", role, pruned)
        return True

    def list_roles(self) -> set[Role]:
        with self._lock.read():
            return set(self._state.roles)

    def role_exists(self, role: Role) -> bool:
        with self._lock.read():
            return role in self._state.roles

    def assign_permission_to_role(self, role: Role, permission: Permission) -> bool:
        """Grant a permission to a role. Returns False if already granted."""
        with self._lock.write():
            self._require_role(role)
            self._require_permission(permission)
            linked = self._state.link_permission(role, permission)
        if linked:
            logger.debug("Assigned permission %s to role %s", permission, role)
        return linked

    def remove_permission_from_role(self, role: Role, permission: Permission) -> bool:
        """Revoke a permission from a role. Returns False if it was not granted."""
        with self._lock.write():
            self._require_role(role)
            self._require_permission(permission)
            unlinked = self._state.unlink_permission(role, permission)
        if unlinked:
            logger.debug("Removed permission %s from role %s", permission, role)
        return unlinked

    def list_role_permissions(self, role: Role) -> set[Permission]:
        with self._lock.read():
            self._require_role(role)
            return set(self._state.role_permissions.get(role, ()))

    def role_has_permission(self, role: Role, permission: Permission) -> bool:
        with self._lock.read():
            self._require_role(role)
            self._require_permission(permission)
            return self._state.role_grants(role, permission)

    # -- Users -----------------------------------------------------------------

    def register_user(self, user: User) -> bool:
        """Register a user. Returns False if it was already registered."""
        with self._lock.write():
            added = self._state.add_user(user)
        if added:
            logger.debug("Registered user %s", user)
        return added

    def remove_user(self, user: User) -> bool:
        """Unregister a user along with all of its role assignments.

        Returns False if the user was not registered.
        """
        with self._lock.write():
            if user not in self._state.users:
                return False
            held = self._state.drop_user(user)
        logger.debug("Removed user %s (dropped %d role assignments)", user, held)
        return True

    def list_users(self) -> set[User]:
        with self._lock.read():
            return set(self._state.users)

    def user_exists(self, user: User) -> bool:
        with self._lock.read():
            return user in self._state.users

    def assign_role_to_user(self, user: User, role: Role) -> bool:
        """Assign a role to a user. Returns False if already assigned."""
        with self._lock.write():
            self._require_user(user)
            self._require_role(role)
            linked = self._state.link_role(user, role)
        if linked:
            logger.debug("Assigned role %s to user %s", role, user)
        return linked

    def remove_role_from_user(self, user: User, role: Role) -> bool:
        """Unassign a role from a user. Returns False if it was not assigned."""
        with self._lock.write():
            self._require_user(user)
            self._require_role(role)
            unlinked = self._state.unlink_role(user, role)
        if unlinked:
            logger.debug("Removed role %s from user %s", role, user)
        return unlinked

    def list_user_roles(self, user: User) -> set[Role]:
        with self._lock.read():
            self._require_user(user)
            return set(self._state.user_roles.get(user, ()))

    def user_has_role(self, user: User, role: Role) -> bool:
        with self._lock.read():
            self._require_user(user)
            self._require_role(role)
            return self._state.user_holds(user, role)

    # -- Authorization ---------------------------------------------------------

    def user_has_permission(self, user: User, permission: Permission) -> bool:
        """Check whether any role assigned to the user grants the permission.

        Both the user and the permission have to be registered.
        """
        with self._lock.read():
            self._require_user(user)
            self._require_permission(permission)
            return self._state.user_granted(user, permission)

    def user_has_object_action(self, user: User, obj: Object | str, action: Action | str) -> bool:
        """Like ``user_has_permission`` for the permission ``(obj, action)``.

        The permission must already be registered; it is checked before the user.
        """
        permission = Permission(object=obj, action=action)
        with self._lock.read():
            self._require_permission(permission)
            self._require_user(user)
            return self._state.user_granted(user, permission)

    def list_user_permissions(self, user: User) -> set[Permission]:
        """Every permission granted to the user through its assigned roles."""
        with self._lock.read():
            self._require_user(user)
            return self._state.user_permissions(user)
