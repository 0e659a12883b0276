"""Tests for role↔permission and user↔role associations."""

from __future__ import annotations

import pytest

from gatehouse_core.identity.models import Permission, Role, User
from gatehouse_core.rbac import (
    RBAC,
    PermissionNotRegisteredError,
    RBACError,
    RoleNotRegisteredError,
    UserNotRegisteredError,
)


# -- Role ↔ Permission ---------------------------------------------------------


class TestAssignPermissionToRole:
    def test_assign(self, rbac: RBAC, admin, doc_read):
        rbac.register_role(admin)
        rbac.register_permission(doc_read)
        assert rbac.assign_permission_to_role(admin, doc_read) is True
        assert rbac.role_has_permission(admin, doc_read) is True

    def test_assign_twice_returns_false(self, rbac: RBAC, admin, doc_read):
        rbac.register_role(admin)
        rbac.register_permission(doc_read)
        rbac.assign_permission_to_role(admin, doc_read)
        assert rbac.assign_permission_to_role(admin, doc_read) is False
        assert rbac.list_role_permissions(admin) == {doc_read}

    def test_unregistered_role(self, rbac: RBAC, doc_read):
        ghost = Role(id="ghost-role")
        rbac.register_permission(doc_read)
        with pytest.raises(RoleNotRegisteredError) as exc_info:
            rbac.assign_permission_to_role(ghost, doc_read)
        assert exc_info.value.entity == ghost
        with pytest.raises(RoleNotRegisteredError):
            rbac.list_role_permissions(ghost)

    def test_unregistered_role_does_not_auto_register(self, rbac: RBAC, doc_read):
        ghost = Role(id="ghost-role")
        rbac.register_permission(doc_read)
        with pytest.raises(RoleNotRegisteredError):
            rbac.assign_permission_to_role(ghost, doc_read)
        assert rbac.role_exists(ghost) is False
        rbac.register_role(ghost)
        assert rbac.list_role_permissions(ghost) == set()

    def test_unregistered_permission(self, rbac: RBAC, admin, doc_read):
        rbac.register_role(admin)
        with pytest.raises(PermissionNotRegisteredError):
            rbac.assign_permission_to_role(admin, doc_read)
        assert rbac.list_role_permissions(admin) == set()

    def test_role_error_reported_before_permission(self, rbac: RBAC, admin, doc_read):
        with pytest.raises(RoleNotRegisteredError):
            rbac.assign_permission_to_role(admin, doc_read)
        with pytest.raises(RoleNotRegisteredError):
            rbac.remove_permission_from_role(admin, doc_read)
        with pytest.raises(RoleNotRegisteredError):
            rbac.role_has_permission(admin, doc_read)


class TestRemovePermissionFromRole:
    def test_remove(self, granted_rbac: RBAC, admin, doc_read):
        assert granted_rbac.remove_permission_from_role(admin, doc_read) is True
        assert granted_rbac.role_has_permission(admin, doc_read) is False
        # role entry stays, just empty
        assert granted_rbac.list_role_permissions(admin) == set()

    def test_remove_not_assigned(self, rbac: RBAC, admin, doc_read):
        rbac.register_role(admin)
        rbac.register_permission(doc_read)
        assert rbac.remove_permission_from_role(admin, doc_read) is False

    def test_unregistered_permission(self, rbac: RBAC, admin, doc_write):
        rbac.register_role(admin)
        with pytest.raises(PermissionNotRegisteredError):
            rbac.remove_permission_from_role(admin, doc_write)


def test_list_role_permissions(rbac: RBAC, admin):
    perms = {Permission(object=f"obj{i}", action="read") for i in range(10)}
    rbac.register_role(admin)
    for p in perms:
        rbac.register_permission(p)
        rbac.assign_permission_to_role(admin, p)
    assert rbac.list_role_permissions(admin) == perms


def test_list_role_permissions_is_a_snapshot(granted_rbac: RBAC, admin, doc_read, doc_write):
    listed = granted_rbac.list_role_permissions(admin)
    listed.add(doc_write)
    assert granted_rbac.list_role_permissions(admin) == {doc_read}


# -- User ↔ Role ---------------------------------------------------------------


class TestAssignRoleToUser:
    def test_assign(self, rbac: RBAC, alice, admin):
        rbac.register_user(alice)
        rbac.register_role(admin)
        assert rbac.assign_role_to_user(alice, admin) is True
        assert rbac.user_has_role(alice, admin) is True

    def test_assign_twice_returns_false(self, granted_rbac: RBAC, alice, admin):
        assert granted_rbac.assign_role_to_user(alice, admin) is False
        assert granted_rbac.list_user_roles(alice) == {admin}

    def test_unregistered_user(self, rbac: RBAC, alice, admin):
        rbac.register_role(admin)
        with pytest.raises(UserNotRegisteredError):
            rbac.assign_role_to_user(alice, admin)
        assert rbac.user_exists(alice) is False

    def test_unregistered_role(self, rbac: RBAC, alice, admin):
        rbac.register_user(alice)
        with pytest.raises(RoleNotRegisteredError):
            rbac.assign_role_to_user(alice, admin)
        assert rbac.list_user_roles(alice) == set()

    def test_user_error_reported_before_role(self, rbac: RBAC, alice, admin):
        with pytest.raises(UserNotRegisteredError):
            rbac.assign_role_to_user(alice, admin)
        with pytest.raises(UserNotRegisteredError):
            rbac.remove_role_from_user(alice, admin)
        with pytest.raises(UserNotRegisteredError):
            rbac.user_has_role(alice, admin)


class TestRemoveRoleFromUser:
    def test_remove(self, granted_rbac: RBAC, alice, admin, doc_read):
        assert granted_rbac.remove_role_from_user(alice, admin) is True
        assert granted_rbac.user_has_role(alice, admin) is False
        assert granted_rbac.user_has_permission(alice, doc_read) is False

    def test_remove_not_assigned(self, rbac: RBAC, alice, admin):
        rbac.register_user(alice)
        rbac.register_role(admin)
        assert rbac.remove_role_from_user(alice, admin) is False

    def test_unregistered_role(self, rbac: RBAC, alice):
        rbac.register_user(alice)
        with pytest.raises(RoleNotRegisteredError):
            rbac.remove_role_from_user(alice, Role(id="ghost"))

    def test_unregistered_user(self, granted_rbac: RBAC, alice, admin):
        with pytest.raises(UserNotRegisteredError):
            granted_rbac.remove_role_from_user(User(id="ghost"), admin)
        assert granted_rbac.user_has_role(alice, admin) is True


def test_list_user_roles(rbac: RBAC, alice):
    roles = {Role(id=f"role{i}") for i in range(5)}
    rbac.register_user(alice)
    for r in roles:
        rbac.register_role(r)
        rbac.assign_role_to_user(alice, r)
    assert rbac.list_user_roles(alice) == roles


def test_list_user_roles_unregistered(rbac: RBAC):
    with pytest.raises(UserNotRegisteredError):
        rbac.list_user_roles(User(id="nobody"))


# -- Errors --------------------------------------------------------------------


class TestErrors:
    def test_all_share_a_base(self):
        for cls in (PermissionNotRegisteredError, RoleNotRegisteredError, UserNotRegisteredError):
            assert issubclass(cls, RBACError)

    def test_message_names_entity(self):
        err = RoleNotRegisteredError(Role(id="ghost"))
        assert str(err) == "role is not registered: ghost"
        assert err.entity == Role(id="ghost")

    def test_permission_message(self):
        err = PermissionNotRegisteredError(Permission(object="doc", action="read"))
        assert str(err) == "permission is not registered: doc:read"

    def test_failed_precondition_leaves_state_untouched(self, rbac: RBAC, doc_read):
        rbac.register_permission(doc_read)
        before = (rbac.list_roles(), rbac.list_permissions(), rbac.list_users())
        with pytest.raises(RBACError):
            rbac.assign_permission_to_role(Role(id="ghost"), doc_read)
        assert (rbac.list_roles(), rbac.list_permissions(), rbac.list_users()) == before
