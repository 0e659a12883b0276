"""Apply a declarative bootstrap policy to an RBAC registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gatehouse_core.config.models import PolicyConfig
from gatehouse_core.identity.models import Permission, Role, User
from gatehouse_core.rbac.controller import RBAC

logger = logging.getLogger(__name__)


@dataclass
class PolicySummary:
    """Counts of entities and assignments newly created by ``apply_policy``."""

    permissions: int = 0
    roles: int = 0
    users: int = 0
    role_grants: int = 0
    user_assignments: int = 0

    @property
    def changed(self) -> bool:
        return any(
            (self.permissions, self.roles, self.users, self.role_grants, self.user_assignments)
        )


def apply_policy(rbac: RBAC, policy: PolicyConfig) -> PolicySummary:
    """Register everything the policy declares, then build its associations.

    Permissions referenced in a role's grant list are registered implicitly.
    Roles referenced by users must be declared under ``roles``; otherwise the
    controller raises ``RoleNotRegisteredError``. Re-applying a policy that is
    already in place changes nothing.
    """
    summary = PolicySummary()

    declared = [Permission.parse(p) for p in policy.permissions]
    grants = {
        Role(id=name): [Permission.parse(p) for p in perms]
        for name, perms in policy.roles.items()
    }
    assignments = {
        User(id=name): [Role(id=r) for r in roles] for name, roles in policy.users.items()
    }

    for permission in declared + [p for perms in grants.values() for p in perms]:
        summary.permissions += rbac.register_permission(permission)
    for role in grants:
        summary.roles += rbac.register_role(role)
    for user in assignments:
        summary.users += rbac.register_user(user)

    for role, perms in grants.items():
        for permission in perms:
            summary.role_grants += rbac.assign_permission_to_role(role, permission)
    for user, roles in assignments.items():
        for role in roles:
            summary.user_assignments += rbac.assign_role_to_user(user, role)

    logger.info(
        "Applied policy: %d permissions, %d roles, %d users, %d grants, %d assignments",
        summary.permissions,
        summary.roles,
        summary.users,
        summary.role_grants,
        summary.user_assignments,
    )
    return summary


def build_rbac(policy: PolicyConfig) -> RBAC:
    """Create a fresh registry with ``policy`` applied."""
    rbac = RBAC()
    apply_policy(rbac, policy)
    return rbac
