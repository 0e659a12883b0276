"""Registry sets and association maps, without locking.

``RBACState`` owns the three registered-entity sets and the two relation
maps. Its methods assume the caller already holds the appropriate lock and
has checked registration preconditions; ``RBAC`` in ``controller`` is the
only intended caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gatehouse_core.identity.models import Permission, Role, User


@dataclass
class RBACState:
    permissions: set[Permission] = field(default_factory=set)
    roles: set[Role] = field(default_factory=set)
    users: set[User] = field(default_factory=set)

    role_permissions: dict[Role, set[Permission]] = field(default_factory=dict)
    user_roles: dict[User, set[Role]] = field(default_factory=dict)

    # -- Registry --------------------------------------------------------------

    @staticmethod
    def _add(registered: set, entity: object) -> bool:
        if entity in registered:
            return False
        registered.add(entity)
        return True

    def add_permission(self, permission: Permission) -> bool:
        return self._add(self.permissions, permission)

    def add_role(self, role: Role) -> bool:
        return self._add(self.roles, role)

    def add_user(self, user: User) -> bool:
        return self._add(self.users, user)

    def drop_permission(self, permission: Permission) -> int:
        """Unregister a permission and prune it from every role.

        Role entries are kept, even when their permission set becomes empty.
        Returns the number of roles the permission was pruned from.
        """
        pruned = 0
        for perms in self.role_permissions.values():
            if permission in perms:
                perms.discard(permission)
                pruned += 1
        self.permissions.discard(permission)
        return pruned

    def drop_role(self, role: Role) -> int:
        """Unregister a role, drop its permission entry and unassign it from users.

        User entries are kept, even when their role set becomes empty.
        Returns the number of users the role was unassigned from.
        """
        self.role_permissions.pop(role, None)
        pruned = 0
        for roles in self.user_roles.values():
            if role in roles:
                roles.discard(role)
                pruned += 1
        self.roles.discard(role)
        return pruned

    def drop_user(self, user: User) -> int:
        """Unregister a user and drop its role entry. Returns the roles it held."""
        held = self.user_roles.pop(user, set())
        self.users.discard(user)
        return len(held)

    # -- Associations ----------------------------------------------------------

    def link_permission(self, role: Role, permission: Permission) -> bool:
        perms = self.role_permissions.setdefault(role, set())
        if permission in perms:
            return False
        perms.add(permission)
        return True

    def unlink_permission(self, role: Role, permission: Permission) -> bool:
        perms = self.role_permissions.get(role)
        if perms is None or permission not in perms:
            return False
        perms.discard(permission)
        return True

    def link_role(self, user: User, role: Role) -> bool:
        roles = self.user_roles.setdefault(user, set())
        if role in roles:
            return False
        roles.add(role)
        return True

    def unlink_role(self, user: User, role: Role) -> bool:
        roles = self.user_roles.get(user)
        if roles is None or role not in roles:
            return False
        roles.discard(role)
        return True

    # -- Lookups ---------------------------------------------------------------

    def role_grants(self, role: Role, permission: Permission) -> bool:
        return permission in self.role_permissions.get(role, ())

    def user_holds(self, user: User, role: Role) -> bool:
        return role in self.user_roles.get(user, ())

    def user_granted(self, user: User, permission: Permission) -> bool:
        """One hop: does any role held by the user directly grant the permission?"""
        return any(self.role_grants(role, permission) for role in self.user_roles.get(user, ()))

    def user_permissions(self, user: User) -> set[Permission]:
        granted: set[Permission] = set()
        for role in self.user_roles.get(user, ()):
            granted |= self.role_permissions.get(role, set())
        return granted
