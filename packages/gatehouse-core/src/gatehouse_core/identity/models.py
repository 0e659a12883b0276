"""Value types for access-control identities."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Identifier(BaseModel):
    """A named string identifier, equal and hashable by value.

    Immutable. A bare string validates as ``{"id": <string>}``, so nested
    fields accept plain strings.
    """

    model_config = ConfigDict(frozen=True)

    id: str

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"id": data}
        return data

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("id cannot be empty or whitespace")
        return v

    def __str__(self) -> str:
        return self.id


class Object(Identifier):
    """Identifier of a protected resource class."""


class Action(Identifier):
    """Identifier of an operation on a resource."""


class Role(Identifier):
    """Named bundle of permissions."""


class User(Identifier):
    """Principal that may be assigned roles."""


class Permission(BaseModel):
    """A unique object-action pair."""

    model_config = ConfigDict(frozen=True)

    object: Object
    action: Action

    @classmethod
    def parse(cls, value: str) -> Permission:
        """Parse the ``object:action`` form produced by ``str()``."""
        obj, sep, action = value.rpartition(":")
        if not sep:
            raise ValueError(f"Invalid permission {value!r}, expected 'object:action'")
        return cls(object=obj, action=action)

    def __str__(self) -> str:
        return f"{self.object}:{self.action}"
