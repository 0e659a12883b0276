from pydantic import BaseModel, Field, field_validator
from typing import Literal

from gatehouse_core.identity.models import Permission


class PolicyConfig(BaseModel):
    """Declarative bootstrap policy: permissions, role grants and user assignments."""

    permissions: list[str] = Field(default_factory=list)
    roles: dict[str, list[str]] = Field(default_factory=dict)
    users: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, v: list[str]) -> list[str]:
        for entry in v:
            Permission.parse(entry)
        return v

    @field_validator("roles")
    @classmethod
    def validate_role_grants(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        for entries in v.values():
            for entry in entries:
                Permission.parse(entry)
        return v


class GatehouseConfig(BaseModel):
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
