"""User-facing Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserPayload(BaseModel):
    """Registration body."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"username": "janedoe", "password": "secret"}},
    )

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRegistered(BaseModel):
    """Confirmation returned after a successful registration."""

    model_config = ConfigDict(from_attributes=True)

    username: str


__all__ = ["UserPayload", "UserRegistered"]
