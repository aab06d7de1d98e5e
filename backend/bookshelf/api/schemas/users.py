"""User request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=72)


class UserUpdate(BaseModel):
    """Only the fields present in the body are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=3, max_length=320)
    password: str | None = Field(None, min_length=1, max_length=72)


class UserRead(BaseModel):
    """Public view of a user. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    message: str
    user: UserRead


class UserListResponse(BaseModel):
    message: str
    users: list[UserRead]
