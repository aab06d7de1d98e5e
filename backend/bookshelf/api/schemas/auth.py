"""Authentication request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """
    Request payload for login endpoint.

    No length limits: any credential that does not match is a 401, not a 400.
    """

    email: str
    password: str


class LoginResponse(BaseModel):
    """Successful login: user id plus a bearer token."""

    message: str = "Success Login"
    user_id: int
    token: str
