"""Shared test fixtures for Gatehouse."""

import pytest

from gatehouse_core.config.models import GatehouseConfig, PolicyConfig
from gatehouse_core.identity.models import Permission, Role, User
from gatehouse_core.rbac import RBAC


@pytest.fixture
def rbac():
    return RBAC()


@pytest.fixture
def doc_read():
    return Permission(object="doc", action="read")


@pytest.fixture
def doc_write():
    return Permission(object="doc", action="write")


@pytest.fixture
def admin():
    return Role(id="admin")


@pytest.fixture
def editor():
    return Role(id="editor")


@pytest.fixture
def alice():
    return User(id="alice")


@pytest.fixture
def granted_rbac(rbac, admin, doc_read, alice):
    """alice holds admin, admin holds doc:read."""
    rbac.register_role(admin)
    rbac.register_permission(doc_read)
    rbac.register_user(alice)
    rbac.assign_permission_to_role(admin, doc_read)
    rbac.assign_role_to_user(alice, admin)
    return rbac


@pytest.fixture
def sample_policy():
    return PolicyConfig(
        permissions=["doc:read", "doc:write", "report:export"],
        roles={
            "viewer": ["doc:read"],
            "editor": ["doc:read", "doc:write"],
        },
        users={
            "alice": ["editor"],
            "bob": ["viewer"],
        },
    )


@pytest.fixture
def sample_config(sample_policy):
    return GatehouseConfig(policy=sample_policy)
