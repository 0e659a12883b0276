"""Identity value types: objects, actions, permissions, roles, users."""

from gatehouse_core.identity.models import Action, Identifier, Object, Permission, Role, User

__all__ = [
    "Action",
    "Identifier",
    "Object",
    "Permission",
    "Role",
    "User",
]
