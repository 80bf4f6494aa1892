from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CreateUserRequest(BaseModel):
    # A missing name decodes as "" and is rejected by the registry, not the schema.
    name: str = Field(default="", description="Display name of the user; must be non-empty")

    @field_validator("name")
    @classmethod
    def _name_is_utf8(cls, v: str) -> str:
        # Lone surrogates would be stored but could never be encoded on the way out.
        try:
            v.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError("name must be valid UTF-8 text") from e
        return v


class UserResponse(BaseModel):
    name: str


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str
    id_policy: str
    users: int
